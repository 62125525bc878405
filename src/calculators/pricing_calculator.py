"""Pricing calculator for project rates and lifetime project costs.

This module implements:
- The package rate table (ordered ``min_hours -> rate`` tiers)
- Hourly rate resolution for custom and package billing
- Lifetime cost metrics per project (retroactive tier pricing)

Package pricing is a step function over the project's cumulative lifetime
hours: once a project crosses a threshold, all of its hours are priced at the
new tier's rate. There is no blending between tiers: a project with 39.9
hours pays the rate of the highest threshold it has reached for all of them.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

from src.calculators.time_utils import calculate_booking_duration_in_hours
from src.models.booking import BookingRecord
from src.models.project import Project

if TYPE_CHECKING:
    from src.config.settings import CalendarSettings

logger = logging.getLogger(__name__)

MONEY_PRECISION = Decimal("0.01")


@dataclass(frozen=True)
class RateTier:
    """A package pricing bracket.

    Attributes:
        min_hours: Inclusive lower bound on cumulative project hours
        rate: Hourly rate applied once min_hours is reached
    """

    min_hours: Decimal
    rate: Decimal


@dataclass(frozen=True)
class PricingPolicy:
    """Package rate table, ordered by descending threshold.

    The table must contain a zero-hour tier so that every project resolves
    to some rate.

    Example:
        >>> policy = PricingPolicy.from_pairs([(0, 100), (5, 80)])
        >>> policy.rate_for_hours(Decimal("4.9"))
        Decimal('100')
        >>> policy.rate_for_hours(Decimal("5"))
        Decimal('80')
    """

    tiers: Tuple[RateTier, ...]

    def __post_init__(self):
        if not self.tiers:
            raise ValueError("PricingPolicy requires at least one rate tier")
        if not any(tier.min_hours == 0 for tier in self.tiers):
            raise ValueError("PricingPolicy requires a 0-hour tier")
        ordered = tuple(sorted(self.tiers, key=lambda t: t.min_hours, reverse=True))
        object.__setattr__(self, "tiers", ordered)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[object, object]]) -> "PricingPolicy":
        """Build a policy from ``(min_hours, rate)`` pairs in any order."""
        return cls(
            tiers=tuple(
                RateTier(min_hours=Decimal(str(hours)), rate=Decimal(str(rate)))
                for hours, rate in pairs
            )
        )

    @classmethod
    def from_settings(cls, settings: "CalendarSettings") -> "PricingPolicy":
        """Build a policy from the configured package rate tiers."""
        return cls(
            tiers=tuple(
                RateTier(min_hours=tier.min_hours, rate=tier.rate)
                for tier in settings.package_rate_tiers
            )
        )

    def rate_for_hours(self, cumulative_hours: Decimal) -> Decimal:
        """Return the rate of the highest tier whose threshold is reached."""
        for tier in self.tiers:
            if cumulative_hours >= tier.min_hours:
                return tier.rate
        # Only reachable with negative hours from inverted booking ranges
        return self.tiers[-1].rate


DEFAULT_PRICING_POLICY = PricingPolicy.from_pairs(
    [(40, 160), (20, 230), (10, 260), (0, 350)]
)


@dataclass
class ProjectCostMetrics:
    """Lifetime cost summary of a project.

    Attributes:
        total_hours: Sum of hours across every booking of the project
        price_per_hour: Rate resolved against total_hours
        total_amount: total_hours × price_per_hour

    Example:
        >>> metrics = ProjectCostMetrics(
        ...     total_hours=Decimal("11.0"),
        ...     price_per_hour=Decimal("260"),
        ...     total_amount=Decimal("2860.00"),
        ... )
        >>> metrics.total_amount
        Decimal('2860.00')
    """

    total_hours: Decimal
    price_per_hour: Decimal
    total_amount: Decimal


def booking_hours(record: BookingRecord) -> Decimal:
    """Hours a booking record contributes to billing.

    The stored ``duration`` wins when the record has one; otherwise the
    duration is derived from the booking's start and end.
    """
    if record.duration is not None:
        return record.duration
    return calculate_booking_duration_in_hours(record)


def sum_booking_hours(records: Iterable[BookingRecord]) -> Decimal:
    """Sum billing hours over booking records."""
    return sum((booking_hours(record) for record in records), Decimal("0"))


def resolve_project_rate(
    project: Project,
    cumulative_hours: Decimal,
    policy: Optional[PricingPolicy] = None,
) -> Decimal:
    """Determine the hourly rate of a project.

    - ``custom`` billing: the project's custom rate, regardless of hours.
      A custom project without a rate bills at 0.
    - ``package`` billing: the tier reached by the project's cumulative
      lifetime hours (see PricingPolicy).

    Args:
        project: Project with billing metadata
        cumulative_hours: Total hours ever booked on the project
        policy: Package rate table (default: DEFAULT_PRICING_POLICY)

    Returns:
        Hourly rate

    Example:
        >>> project = Project(id="p-1", name="Retainer", billing_type="package")
        >>> resolve_project_rate(project, Decimal("9.9"))
        Decimal('350')
        >>> resolve_project_rate(project, Decimal("39.9"))
        Decimal('230')
        >>> resolve_project_rate(project, Decimal("40"))
        Decimal('160')
    """
    if project.billing_type == "custom":
        if project.custom_rate is None:
            logger.warning(
                f"Project '{project.id}' uses custom billing without a rate, "
                "billing at 0"
            )
            return Decimal("0")
        return project.custom_rate

    policy = policy or DEFAULT_PRICING_POLICY
    return policy.rate_for_hours(Decimal(str(cumulative_hours)))


def calculate_project_cost(
    project_bookings: Sequence[BookingRecord],
    project: Optional[Project],
    policy: Optional[PricingPolicy] = None,
) -> Optional[ProjectCostMetrics]:
    """Calculate lifetime cost metrics for a project.

    The rate is resolved against the hours of ALL bookings passed in, so
    callers must pass every booking ever made for the project, not a single
    month's worth.

    Args:
        project_bookings: All bookings of the project
        project: The project, or None when the reference could not be resolved
        policy: Package rate table (default: DEFAULT_PRICING_POLICY)

    Returns:
        ProjectCostMetrics, or None if no project was provided

    Example:
        >>> project = Project(id="p-1", name="Retainer", billing_type="package")
        >>> bookings = [
        ...     BookingRecord(id="b-1", clientId="c-1", projectId="p-1", duration=5),
        ...     BookingRecord(id="b-2", clientId="c-1", projectId="p-1", duration=6),
        ... ]
        >>> calculate_project_cost(bookings, project).total_amount
        Decimal('2860.00')
    """
    if project is None:
        logger.error("Project details not provided, cannot calculate project cost")
        return None

    total_hours = sum_booking_hours(project_bookings)
    price_per_hour = resolve_project_rate(project, total_hours, policy)
    total_amount = (total_hours * price_per_hour).quantize(
        MONEY_PRECISION, rounding=ROUND_HALF_UP
    )

    logger.debug(
        f"Project '{project.id}': {total_hours}h at {price_per_hour}/h "
        f"= {total_amount}"
    )

    return ProjectCostMetrics(
        total_hours=total_hours,
        price_per_hour=price_per_hour,
        total_amount=total_amount,
    )


def group_bookings_by_project(
    records: Iterable[BookingRecord],
) -> Dict[str, List[BookingRecord]]:
    """Group booking records by project id, dropping records without one."""
    groups: Dict[str, List[BookingRecord]] = defaultdict(list)
    for record in records:
        if record.project_id:
            groups[record.project_id].append(record)
    return dict(groups)


def calculate_all_project_costs(
    records: Sequence[BookingRecord],
    projects: Sequence[Project],
    policy: Optional[PricingPolicy] = None,
) -> Dict[str, ProjectCostMetrics]:
    """Calculate lifetime cost metrics for every known project.

    Projects without bookings are reported with zero hours. Bookings that
    reference unknown projects are ignored.

    Returns:
        Dictionary mapping project id to ProjectCostMetrics, in the order
        of ``projects``
    """
    by_project = group_bookings_by_project(records)
    results: Dict[str, ProjectCostMetrics] = {}

    for project in projects:
        metrics = calculate_project_cost(by_project.get(project.id, []), project, policy)
        if metrics is not None:
            results[project.id] = metrics

    unknown = set(by_project) - {project.id for project in projects}
    if unknown:
        logger.debug(f"Ignoring bookings for unknown projects: {sorted(unknown)}")

    return results
