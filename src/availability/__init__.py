"""Availability module: week dates, hour slots and slot classification."""

from src.availability.slot_classifier import (
    BUFFER_HOURS,
    CALENDAR_END_HOUR,
    CALENDAR_START_HOUR,
    DayWithSlots,
    SlotAvailability,
    TimeSlot,
    build_day_slots,
    build_week_matrix,
    build_week_slots,
    check_slot_availability,
    generate_time_slots,
    get_week_dates,
)

__all__ = [
    "BUFFER_HOURS",
    "CALENDAR_END_HOUR",
    "CALENDAR_START_HOUR",
    "DayWithSlots",
    "SlotAvailability",
    "TimeSlot",
    "build_day_slots",
    "build_week_matrix",
    "build_week_slots",
    "check_slot_availability",
    "generate_time_slots",
    "get_week_dates",
]
