"""
Data readers for loading exported booking data.
"""

from .booking_data_reader import BookingData, BookingDataError, BookingDataReader

__all__ = ["BookingData", "BookingDataError", "BookingDataReader"]
