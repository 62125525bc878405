"""Monthly per-client billing metrics.

This module rolls booking records up into a monthly report keyed by client
display name:

1. Keep the bookings that start in the target calendar month
2. Group them by client, then by project
3. Price each project's monthly hours at the project's lifetime rate
4. Sum per client and derive the client's effective hourly rate

The project rate always comes from the project's lifetime hours (every
booking ever made for it, in any month), so tier discounts earned earlier
apply to this month's hours too.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

from src.calculators.pricing_calculator import (
    MONEY_PRECISION,
    PricingPolicy,
    calculate_project_cost,
    group_bookings_by_project,
    sum_booking_hours,
)
from src.calculators.time_utils import DateLike, is_same_month
from src.models.booking import BookingRecord
from src.models.client import Client
from src.models.project import Project
from src.utils.logging_utils import LogContext

logger = logging.getLogger(__name__)


@dataclass
class ClientMonthlyMetrics:
    """Billing summary of one client for one month.

    Attributes:
        total_hours: Hours booked by the client in the month
        price_per_hour: Effective rate, total_amount / total_hours
        total_amount: Sum of each project's monthly hours × lifetime rate

    Example:
        >>> metrics = ClientMonthlyMetrics(
        ...     total_hours=Decimal("15"),
        ...     price_per_hour=Decimal("226.67"),
        ...     total_amount=Decimal("3400.00"),
        ... )
        >>> metrics.price_per_hour
        Decimal('226.67')
    """

    total_hours: Decimal
    price_per_hour: Decimal
    total_amount: Decimal


MonthlyRecipe = Dict[str, ClientMonthlyMetrics]


def filter_bookings_for_month(
    records: Sequence[BookingRecord], target_month: DateLike
) -> List[BookingRecord]:
    """Keep the records whose start falls in the month of ``target_month``."""
    return [
        record
        for record in records
        if record.start_time is not None
        and is_same_month(record.start_time, target_month)
    ]


def calculate_monthly_client_metrics(
    records: Sequence[BookingRecord],
    projects: Sequence[Project],
    clients: Sequence[Client],
    target_month: DateLike,
    policy: Optional[PricingPolicy] = None,
) -> MonthlyRecipe:
    """Calculate hours, effective rate and amount per client for a month.

    Bookings referencing clients or projects missing from the provided lists
    contribute nothing and raise no error.

    Args:
        records: ALL booking records (any month); needed for lifetime rates
        projects: Known projects
        clients: Known clients
        target_month: Any date inside the month to report on
        policy: Package rate table (default: DEFAULT_PRICING_POLICY)

    Returns:
        Dictionary mapping client display name to ClientMonthlyMetrics

    Example:
        5h in April and 6h in May put the project in the 10h tier, so the
        May hours bill at 260:

        >>> from datetime import date, datetime
        >>> records = [
        ...     BookingRecord(id="b-1", clientId="c-1", projectId="p-1",
        ...                   startTime=datetime(2024, 4, 8, 9),
        ...                   endTime=datetime(2024, 4, 8, 14)),
        ...     BookingRecord(id="b-2", clientId="c-1", projectId="p-1",
        ...                   startTime=datetime(2024, 5, 6, 9),
        ...                   endTime=datetime(2024, 5, 6, 15)),
        ... ]
        >>> recipe = calculate_monthly_client_metrics(
        ...     records,
        ...     [Project(id="p-1", name="Brand refresh")],
        ...     [Client(id="c-1", name="Acme")],
        ...     date(2024, 5, 1),
        ... )
        >>> recipe["Acme"].total_amount
        Decimal('1560.00')
    """
    clients_by_id = {client.id: client for client in clients}
    projects_by_id = {project.id: project for project in projects}
    lifetime_by_project = group_bookings_by_project(records)

    monthly_records = filter_bookings_for_month(records, target_month)
    month_label = f"{target_month.year}-{target_month.month:02d}"
    logger.info(
        f"Calculating client metrics for {month_label}: "
        f"{len(monthly_records)} of {len(records)} bookings in month"
    )

    by_client: Dict[str, List[BookingRecord]] = defaultdict(list)
    for record in monthly_records:
        by_client[record.client_id].append(record)

    recipe: MonthlyRecipe = {}
    rate_cache: Dict[str, Decimal] = {}

    for client_id, client_records in by_client.items():
        client = clients_by_id.get(client_id)
        if client is None:
            logger.debug(f"Skipping {len(client_records)} bookings of unknown client")
            continue

        with LogContext(client_id=client_id, month=month_label):
            total_hours = Decimal("0")
            total_amount = Decimal("0")

            for project_id, project_records in group_bookings_by_project(
                client_records
            ).items():
                project = projects_by_id.get(project_id)
                if project is None:
                    logger.debug(f"Skipping bookings of unknown project '{project_id}'")
                    continue

                if project_id not in rate_cache:
                    lifetime = calculate_project_cost(
                        lifetime_by_project.get(project_id, []), project, policy
                    )
                    rate_cache[project_id] = lifetime.price_per_hour

                monthly_hours = sum_booking_hours(project_records)
                total_hours += monthly_hours
                total_amount += monthly_hours * rate_cache[project_id]

            total_amount = total_amount.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)
            if total_hours > 0:
                price_per_hour = (total_amount / total_hours).quantize(
                    MONEY_PRECISION, rounding=ROUND_HALF_UP
                )
            else:
                price_per_hour = Decimal("0")

            recipe[client.name] = ClientMonthlyMetrics(
                total_hours=total_hours,
                price_per_hour=price_per_hour,
                total_amount=total_amount,
            )
            logger.debug(
                f"Client '{client.name}': {total_hours}h, {total_amount} "
                f"({price_per_hour}/h effective)"
            )

    return recipe
