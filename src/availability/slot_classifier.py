"""Slot classifier for the weekly booking calendar.

The calendar shows Monday through Saturday (there are no Sunday bookings),
one row per whole hour between the configured start and end hours. Each
hour slot is classified as:

- booked: the slot overlaps a booking
- buffer: the slot starts inside the margin right before or after a booking
- free: neither of the above

Bookings are always scanned in ascending (start, end, id) order, so when
several bookings match a slot the earliest-starting one is reported no
matter how the caller ordered its list.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from src.calculators.time_utils import DateLike, start_of_day
from src.models.booking import Booking
from src.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

CALENDAR_START_HOUR = 9
CALENDAR_END_HOUR = 19
BUFFER_HOURS = 1
WEEK_DISPLAY_DAYS = 6  # Monday to Saturday

SLOT_LENGTH = dt.timedelta(hours=1)

STATUS_BOOKED = "booked"
STATUS_BUFFER = "buffer"
STATUS_FREE = "free"


def _slot_status(is_booked: bool, is_buffer: bool) -> str:
    if is_booked:
        return STATUS_BOOKED
    if is_buffer:
        return STATUS_BUFFER
    return STATUS_FREE


@dataclass(frozen=True)
class SlotAvailability:
    """Classification of a single slot.

    Attributes:
        is_booked: The slot overlaps a booking
        is_buffer: The slot lies in a booking's buffer zone
        booking: The booking responsible for the classification
    """

    is_booked: bool
    is_buffer: bool
    booking: Optional[Booking] = None

    @property
    def status(self) -> str:
        return _slot_status(self.is_booked, self.is_buffer)


@dataclass
class TimeSlot:
    """An hour-aligned calendar cell and its classification."""

    time: dt.datetime
    is_booked: bool = False
    is_buffer: bool = False
    booking: Optional[Booking] = None

    @property
    def status(self) -> str:
        return _slot_status(self.is_booked, self.is_buffer)


@dataclass
class DayWithSlots:
    """A calendar day with its ordered slots."""

    date: dt.date
    slots: List[TimeSlot] = field(default_factory=list)


def get_week_dates(reference: Optional[DateLike] = None) -> List[dt.date]:
    """Return the displayed dates of the week containing ``reference``.

    Weeks start on Monday. Sunday is never part of the displayed week.

    Args:
        reference: Any instant inside the week (default: today)

    Returns:
        Six dates, Monday through Saturday

    Example:
        >>> get_week_dates(dt.date(2024, 5, 8))[0]
        datetime.date(2024, 5, 6)
        >>> get_week_dates(dt.date(2024, 5, 8))[-1]
        datetime.date(2024, 5, 11)
    """
    if reference is None:
        reference = dt.date.today()
    if isinstance(reference, dt.datetime):
        reference = reference.date()

    monday = reference - dt.timedelta(days=reference.weekday())
    return [monday + dt.timedelta(days=offset) for offset in range(WEEK_DISPLAY_DAYS)]


def generate_time_slots(
    day: DateLike,
    start_hour: int = CALENDAR_START_HOUR,
    end_hour: int = CALENDAR_END_HOUR,
) -> List[dt.datetime]:
    """Return the hour-aligned slot start times of a day.

    Slots run from ``start_hour`` through ``end_hour - 1`` inclusive, with
    minutes and seconds zeroed. Timezone info of a datetime ``day`` is kept.

    Example:
        >>> slots = generate_time_slots(dt.date(2024, 5, 6))
        >>> len(slots), slots[0].hour, slots[-1].hour
        (10, 9, 18)
    """
    midnight = start_of_day(day)
    return [midnight.replace(hour=hour) for hour in range(start_hour, end_hour)]


def _overlaps(slot_start: dt.datetime, slot_end: dt.datetime, booking: Booking) -> bool:
    start, end = booking.start_time, booking.end_time
    return (
        (start <= slot_start < end)
        or (start < slot_end <= end)
        or (slot_start <= start and end <= slot_end)
    )


def sort_bookings(bookings: Iterable[Booking]) -> List[Booking]:
    """Order bookings by start, then end, then id."""
    return sorted(bookings, key=lambda b: (b.start_time, b.end_time, b.id))


def check_slot_availability(
    slot_start: dt.datetime,
    bookings: Sequence[Booking],
    buffer_hours: int = BUFFER_HOURS,
) -> SlotAvailability:
    """Classify the one-hour slot starting at ``slot_start``.

    A direct overlap with any booking takes precedence over buffer zones.
    Buffer zones are ``[start - buffer, start)`` and ``[end, end + buffer)``
    of every booking that does not itself overlap the slot.

    Args:
        slot_start: Start of the slot
        bookings: Bookings to check against, in any order
        buffer_hours: Width of the buffer zone on each side of a booking

    Returns:
        SlotAvailability naming the earliest-starting matching booking

    Example:
        >>> booking = Booking(
        ...     id="b-1",
        ...     startTime=dt.datetime(2024, 5, 6, 14),
        ...     endTime=dt.datetime(2024, 5, 6, 16),
        ...     clientId="c-1",
        ...     clientName="Acme",
        ... )
        >>> check_slot_availability(dt.datetime(2024, 5, 6, 13), [booking]).status
        'buffer'
    """
    slot_end = slot_start + SLOT_LENGTH
    ordered = sort_bookings(bookings)

    for booking in ordered:
        if _overlaps(slot_start, slot_end, booking):
            return SlotAvailability(is_booked=True, is_buffer=False, booking=booking)

    buffer = dt.timedelta(hours=buffer_hours)
    for booking in ordered:
        if _overlaps(slot_start, slot_end, booking):
            continue

        if booking.start_time - buffer <= slot_start < booking.start_time:
            return SlotAvailability(is_booked=False, is_buffer=True, booking=booking)
        if booking.end_time <= slot_start < booking.end_time + buffer:
            return SlotAvailability(is_booked=False, is_buffer=True, booking=booking)

    return SlotAvailability(is_booked=False, is_buffer=False)


def build_day_slots(
    day: DateLike,
    bookings: Sequence[Booking],
    start_hour: int = CALENDAR_START_HOUR,
    end_hour: int = CALENDAR_END_HOUR,
    buffer_hours: int = BUFFER_HOURS,
) -> DayWithSlots:
    """Generate and classify all slots of a day."""
    slots = []
    for slot_start in generate_time_slots(day, start_hour, end_hour):
        availability = check_slot_availability(slot_start, bookings, buffer_hours)
        slots.append(
            TimeSlot(
                time=slot_start,
                is_booked=availability.is_booked,
                is_buffer=availability.is_buffer,
                booking=availability.booking,
            )
        )

    date = day.date() if isinstance(day, dt.datetime) else day
    return DayWithSlots(date=date, slots=slots)


@log_function_call
def build_week_slots(
    week_dates: Sequence[DateLike],
    bookings: Sequence[Booking],
    start_hour: int = CALENDAR_START_HOUR,
    end_hour: int = CALENDAR_END_HOUR,
    buffer_hours: int = BUFFER_HOURS,
) -> List[DayWithSlots]:
    """Classify every slot of every displayed day of a week."""
    ordered = sort_bookings(bookings)
    days = [
        build_day_slots(day, ordered, start_hour, end_hour, buffer_hours)
        for day in week_dates
    ]

    booked = sum(slot.is_booked for day in days for slot in day.slots)
    logger.debug(
        f"Classified {len(days)} days against {len(ordered)} bookings, "
        f"{booked} booked slots"
    )
    return days


def build_week_matrix(days: Sequence[DayWithSlots]) -> pd.DataFrame:
    """Generate an hour-by-day availability matrix.

    Rows are slot start times ("09:00"), columns are days ("Mon 2024-05-06"),
    cells are "booked", "buffer" or "free".

    Args:
        days: Classified days, as returned by build_week_slots()

    Returns:
        DataFrame with hour labels as index and day labels as columns
    """
    if not days:
        logger.info("No days to display, returning empty DataFrame")
        return pd.DataFrame()

    hours = [slot.time.strftime("%H:%M") for slot in days[0].slots]
    data = {
        day.date.strftime("%a %Y-%m-%d"): [slot.status for slot in day.slots]
        for day in days
    }

    return pd.DataFrame(data, index=hours)
