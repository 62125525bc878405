"""Calculator modules for the booking calendar."""

from src.calculators.pricing_calculator import (
    DEFAULT_PRICING_POLICY,
    PricingPolicy,
    ProjectCostMetrics,
    RateTier,
    booking_hours,
    calculate_all_project_costs,
    calculate_project_cost,
    resolve_project_rate,
)
from src.calculators.time_utils import (
    calculate_booking_duration_in_hours,
    end_of_day,
    is_same_month,
    start_of_day,
    timedelta_to_decimal_hours,
    to_calendar_time,
)

__all__ = [
    # pricing_calculator
    "DEFAULT_PRICING_POLICY",
    "PricingPolicy",
    "ProjectCostMetrics",
    "RateTier",
    "booking_hours",
    "calculate_all_project_costs",
    "calculate_project_cost",
    "resolve_project_rate",
    # time_utils
    "calculate_booking_duration_in_hours",
    "end_of_day",
    "is_same_month",
    "start_of_day",
    "timedelta_to_decimal_hours",
    "to_calendar_time",
]
