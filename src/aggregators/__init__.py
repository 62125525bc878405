"""Aggregators module for rolling booking records up into reports.

This module provides the monthly per-client billing rollup and the weekly
display bookings consumed by the calendar.
"""

from src.aggregators.monthly_metrics import (
    ClientMonthlyMetrics,
    MonthlyRecipe,
    calculate_monthly_client_metrics,
    filter_bookings_for_month,
)
from src.aggregators.week_bookings import DisplayLabels, get_bookings_for_week

__all__ = [
    "ClientMonthlyMetrics",
    "MonthlyRecipe",
    "calculate_monthly_client_metrics",
    "filter_bookings_for_month",
    "DisplayLabels",
    "get_bookings_for_week",
]
