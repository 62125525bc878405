"""Data quality checks for booking data.

The calculators never reject bookings: inverted ranges produce negative
durations and dangling references are skipped. This validator surfaces those
situations so they can be fixed at the source.
"""

import datetime as dt
import logging
from decimal import Decimal
from typing import Sequence

from src.calculators.time_utils import (
    calculate_booking_duration_in_hours,
    to_calendar_time,
)
from src.models.booking import BookingRecord
from src.models.client import Client
from src.models.project import Project
from src.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

DURATION_TOLERANCE = Decimal("0.1")
SUNDAY = 6


class BookingValidator:
    """Validates booking records against clients, projects and calendar rules.

    Attributes:
        buffer_hours: Buffer width used to flag bookings placed inside the
            buffer zone of another booking
        timezone: Calendar zone; weekdays of aware timestamps are taken
            in this zone
    """

    def __init__(self, buffer_hours: int = 1, timezone: dt.tzinfo = dt.timezone.utc):
        self.buffer_hours = buffer_hours
        self.timezone = timezone

    def validate(
        self,
        records: Sequence[BookingRecord],
        clients: Sequence[Client],
        projects: Sequence[Project],
    ) -> ValidationReport:
        """Run all checks and return the collected issues."""
        report = ValidationReport()

        self._check_projects(projects, report)
        self._check_duplicate_ids(records, report)

        client_ids = {client.id for client in clients}
        project_ids = {project.id for project in projects}
        for record in records:
            self._check_time_range(record, report)
            self._check_references(record, client_ids, project_ids, report)

        self._check_buffer_placement(records, report)

        logger.info(f"Validated {len(records)} bookings: {report.summary()}")
        return report

    def _check_projects(self, projects: Sequence[Project], report: ValidationReport):
        for project in projects:
            if project.billing_type == "custom" and project.custom_rate is None:
                report.add_warning(
                    "custom_rate",
                    "Custom billing without a rate; bookings are billed at 0",
                    None,
                    {"project_id": project.id},
                )

    def _check_duplicate_ids(
        self, records: Sequence[BookingRecord], report: ValidationReport
    ):
        seen = set()
        for record in records:
            if record.id in seen:
                report.add_error("id", "Duplicate booking id", record.id)
            seen.add(record.id)

    def _check_time_range(self, record: BookingRecord, report: ValidationReport):
        context = {"booking_id": record.id}

        if record.start_time is None or record.end_time is None:
            report.add_warning(
                "start_time" if record.start_time is None else "end_time",
                "Missing timestamp; booking counts as 0 hours unless a "
                "duration is stored",
                None,
                context,
            )
            return

        if record.end_time <= record.start_time:
            report.add_error(
                "end_time",
                f"End time ({record.end_time}) must be after start time "
                f"({record.start_time})",
                record.end_time,
                context,
            )
            return

        if to_calendar_time(record.start_time, self.timezone).weekday() == SUNDAY:
            report.add_warning(
                "start_time",
                "Booking on a Sunday is not shown in the calendar week",
                record.start_time,
                context,
            )

        if record.duration is not None:
            computed = calculate_booking_duration_in_hours(record)
            if abs(computed - record.duration) > DURATION_TOLERANCE:
                report.add_warning(
                    "duration",
                    f"Stored duration ({record.duration}h) differs from "
                    f"start/end ({computed}h); stored value is billed",
                    record.duration,
                    context,
                )

    def _check_references(
        self,
        record: BookingRecord,
        client_ids: set,
        project_ids: set,
        report: ValidationReport,
    ):
        context = {"booking_id": record.id}

        if record.client_id not in client_ids:
            report.add_warning(
                "client_id",
                "Unknown client; booking is excluded from monthly reports",
                record.client_id,
                context,
            )

        if record.project_id is None:
            report.add_info(
                "project_id", "Booking has no project and is not billed", None, context
            )
        elif record.project_id not in project_ids:
            report.add_warning(
                "project_id",
                "Unknown project; booking is excluded from billing",
                record.project_id,
                context,
            )

    def _check_buffer_placement(
        self, records: Sequence[BookingRecord], report: ValidationReport
    ):
        """Flag bookings that start inside another booking's buffer zone.

        The slot classifier does not let buffers block bookings, so these are
        reported as info only.
        """
        buffer = dt.timedelta(hours=self.buffer_hours)
        timed = [
            r
            for r in records
            if r.start_time is not None
            and r.end_time is not None
            and r.end_time > r.start_time
        ]

        for record in timed:
            for other in timed:
                if other is record:
                    continue
                in_before = other.start_time - buffer <= record.start_time < other.start_time
                in_after = other.end_time <= record.start_time < other.end_time + buffer
                if in_before or in_after:
                    report.add_info(
                        "start_time",
                        f"Booking starts inside the buffer zone of booking '{other.id}'",
                        record.start_time,
                        {"booking_id": record.id},
                    )
                    break
