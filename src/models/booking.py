"""Booking data models.

Two shapes of a booking exist:

- ``BookingRecord``: the persisted record as handed over by the data store.
  Timestamps may be missing and references may dangle.
- ``Booking``: the read-only display view produced by joining a record with
  its client and project names. Consumed by the slot classifier.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from src.models.base import BaseDataModel


class BookingRecord(BaseDataModel):
    """Represents a persisted booking record.

    Attributes:
        id: Unique booking identifier
        start_time: Booking start instant
        end_time: Booking end instant
        client_id: Reference to the booked client
        project_id: Reference to the billed project, if any
        duration: Stored duration in hours, if the store computed one

    Example:
        >>> record = BookingRecord(
        ...     id="b-1",
        ...     startTime=dt.datetime(2024, 5, 6, 14, 0),
        ...     endTime=dt.datetime(2024, 5, 6, 16, 0),
        ...     clientId="c-1",
        ...     projectId="p-1",
        ...     duration=2,
        ... )
        >>> record.duration
        Decimal('2')
    """

    id: str = Field(..., min_length=1, description="Unique booking identifier")
    start_time: Optional[dt.datetime] = Field(None, alias="startTime")
    end_time: Optional[dt.datetime] = Field(None, alias="endTime")
    client_id: str = Field(..., min_length=1, alias="clientId")
    project_id: Optional[str] = Field(None, alias="projectId")
    duration: Optional[Decimal] = Field(
        None, description="Stored duration in hours"
    )

    @field_validator("duration", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Optional[Decimal]:
        """Convert numeric durations to Decimal for precision."""
        if v is None or isinstance(v, Decimal):
            return v
        try:
            return Decimal(str(v))
        except ArithmeticError as e:
            raise ValueError(f"Cannot convert {v} to Decimal: {e}")


class Booking(BaseDataModel):
    """Display view of a booking, immutable once produced.

    Attributes:
        id: Booking identifier
        start_time: Booking start instant
        end_time: Booking end instant (callers guarantee end > start)
        client_id: Reference to the client
        client_name: Resolved client display name
        project_id: Reference to the project, if any
        service: Service description shown in the calendar
        title: Calendar event title
        price: Computed price, when the caller attached one
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    start_time: dt.datetime = Field(..., alias="startTime")
    end_time: dt.datetime = Field(..., alias="endTime")
    client_id: str = Field(..., alias="clientId")
    client_name: str = Field(..., alias="clientName")
    project_id: Optional[str] = Field(None, alias="projectId")
    service: Optional[str] = None
    title: Optional[str] = None
    price: Optional[Decimal] = None
