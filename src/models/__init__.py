"""Data models for the booking calendar.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- Client: Client that bookings are made for
- Project: Billable project with custom or package pricing
- BookingRecord: Persisted booking record
- Booking: Read-only display view of a booking
"""

from src.models.base import BaseDataModel
from src.models.booking import Booking, BookingRecord
from src.models.client import Client
from src.models.project import Project

__all__ = [
    "BaseDataModel",
    "Booking",
    "BookingRecord",
    "Client",
    "Project",
]
