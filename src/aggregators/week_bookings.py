"""Display bookings for a calendar week.

Joins persisted booking records with their client and project names to
produce the read-only ``Booking`` views the slot classifier works on.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

from src.calculators.time_utils import DateLike, end_of_day, start_of_day
from src.models.booking import Booking, BookingRecord
from src.models.client import Client
from src.models.project import Project

if TYPE_CHECKING:
    from src.config.settings import CalendarSettings

logger = logging.getLogger(__name__)

TITLE_SERVICE_LENGTH = 20


@dataclass(frozen=True)
class DisplayLabels:
    """Localized texts used when building display bookings.

    Attributes:
        unknown_client: Shown when a booking's client cannot be resolved
        unknown_project: Shown when a booking's project cannot be resolved
        service_prefix: Prefix of the synthesized service string
    """

    unknown_client: str = "Unknown client"
    unknown_project: str = "Unknown project"
    service_prefix: str = "Session for"

    @classmethod
    def from_settings(cls, settings: "CalendarSettings") -> "DisplayLabels":
        return cls(
            unknown_client=settings.unknown_client_label,
            unknown_project=settings.unknown_project_label,
            service_prefix=settings.service_prefix,
        )


def get_bookings_for_week(
    week_dates: Sequence[DateLike],
    records: Sequence[BookingRecord],
    clients: Sequence[Client],
    projects: Sequence[Project],
    labels: Optional[DisplayLabels] = None,
) -> List[Booking]:
    """Build display bookings for the records starting within a week.

    A record is included when its start lies between the start of the first
    week date and the end of the last one, both inclusive. Records without
    start or end times cannot be displayed and are skipped.

    Args:
        week_dates: Displayed dates, in order (see get_week_dates())
        records: Persisted booking records
        clients: Known clients
        projects: Known projects
        labels: Placeholder and service texts (default: English labels)

    Returns:
        Display bookings in the order of ``records``

    Example:
        >>> from datetime import date, datetime
        >>> record = BookingRecord(
        ...     id="b-1", clientId="c-1", projectId="p-1",
        ...     startTime=datetime(2024, 5, 6, 14), endTime=datetime(2024, 5, 6, 16),
        ... )
        >>> bookings = get_bookings_for_week(
        ...     [date(2024, 5, 6), date(2024, 5, 7)],
        ...     [record],
        ...     [Client(id="c-1", name="Acme")],
        ...     [Project(id="p-1", name="Brand refresh")],
        ... )
        >>> bookings[0].title
        'Acme / Brand refresh - Session for Brand re'
    """
    if not week_dates:
        return []

    labels = labels or DisplayLabels()
    first_day = start_of_day(week_dates[0])
    last_day = end_of_day(week_dates[-1])

    client_names = {client.id: client.name for client in clients}
    project_names = {project.id: project.name for project in projects}

    bookings: List[Booking] = []
    for record in records:
        if record.start_time is None or record.end_time is None:
            logger.warning(f"Booking '{record.id}' has no start or end time, skipping")
            continue
        if not first_day <= record.start_time <= last_day:
            continue

        client_name = client_names.get(record.client_id, labels.unknown_client)
        project_name = project_names.get(record.project_id, labels.unknown_project)
        service = f"{labels.service_prefix} {project_name}"

        bookings.append(
            Booking(
                id=record.id,
                start_time=record.start_time,
                end_time=record.end_time,
                client_id=record.client_id,
                client_name=client_name,
                project_id=record.project_id,
                service=service,
                title=(
                    f"{client_name} / {project_name} - "
                    f"{service[:TITLE_SERVICE_LENGTH]}"
                ),
            )
        )

    logger.debug(
        f"Selected {len(bookings)} of {len(records)} bookings for week "
        f"{first_day.date()} - {last_day.date()}"
    )
    return bookings
