"""Time calculation utilities for the booking calendar.

This module provides low-level helpers for:
- Converting timedeltas to decimal hours
- Converting aware timestamps to naive calendar-local time
- Day boundaries (start/end of day)
- Calendar month comparison
- Booking durations in hours

The calendar works on naive wall-clock datetimes in one configured zone.
Aware timestamps from an export go through ``to_calendar_time`` first.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

DateLike = Union[dt.date, dt.datetime]

HOURS_PRECISION = Decimal("0.1")


def timedelta_to_decimal_hours(
    td: dt.timedelta, precision: Decimal = HOURS_PRECISION
) -> Decimal:
    """Convert a timedelta to decimal hours.

    Args:
        td: Timedelta to convert
        precision: Quantization step (default: one decimal place)

    Returns:
        Decimal hours rounded with ROUND_HALF_UP

    Example:
        >>> timedelta_to_decimal_hours(dt.timedelta(hours=2))
        Decimal('2.0')
        >>> timedelta_to_decimal_hours(dt.timedelta(minutes=50))
        Decimal('0.8')
        >>> timedelta_to_decimal_hours(dt.timedelta(minutes=10), Decimal("0.01"))
        Decimal('0.17')
    """
    hours = Decimal(str(td.total_seconds())) / Decimal("3600")
    return hours.quantize(precision, rounding=ROUND_HALF_UP)


def to_calendar_time(
    value: Optional[dt.datetime], tz: dt.tzinfo
) -> Optional[dt.datetime]:
    """Convert a timestamp to naive wall-clock time in the calendar zone.

    Naive values are taken to be calendar-local already and returned as is.

    Example:
        >>> to_calendar_time(
        ...     dt.datetime(2024, 5, 6, 14, 0, tzinfo=dt.timezone.utc),
        ...     dt.timezone(dt.timedelta(hours=2)),
        ... )
        datetime.datetime(2024, 5, 6, 16, 0)
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def start_of_day(value: DateLike) -> dt.datetime:
    """Return midnight at the start of the given day.

    Example:
        >>> start_of_day(dt.date(2024, 5, 6))
        datetime.datetime(2024, 5, 6, 0, 0)
    """
    if isinstance(value, dt.datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return dt.datetime.combine(value, dt.time.min)


def end_of_day(value: DateLike) -> dt.datetime:
    """Return the last representable instant of the given day.

    Example:
        >>> end_of_day(dt.date(2024, 5, 11))
        datetime.datetime(2024, 5, 11, 23, 59, 59, 999999)
    """
    if isinstance(value, dt.datetime):
        return value.replace(hour=23, minute=59, second=59, microsecond=999999)
    return dt.datetime.combine(value, dt.time.max)


def is_same_month(value: DateLike, other: DateLike) -> bool:
    """Check whether two dates fall in the same calendar month and year."""
    return value.year == other.year and value.month == other.month


def calculate_booking_duration_in_hours(booking) -> Decimal:
    """Calculate the duration of a booking in hours, to one decimal place.

    Works with anything exposing ``start_time`` and ``end_time`` (both
    ``Booking`` and ``BookingRecord``). Inverted ranges are not rejected and
    yield a negative duration.

    Args:
        booking: Booking or booking record

    Returns:
        Duration in hours, or ``Decimal("0")`` if either endpoint is missing

    Example:
        >>> record = BookingRecord(
        ...     id="b-1",
        ...     startTime=dt.datetime(2024, 5, 6, 14, 0),
        ...     endTime=dt.datetime(2024, 5, 6, 15, 20),
        ...     clientId="c-1",
        ... )
        >>> calculate_booking_duration_in_hours(record)
        Decimal('1.3')
    """
    if booking.start_time is None or booking.end_time is None:
        return Decimal("0")
    return timedelta_to_decimal_hours(booking.end_time - booking.start_time)
