"""CLI utility functions."""

from src.cli.utils.formatters import (
    format_amount,
    format_error,
    format_hours,
    format_info,
    format_success,
    format_table,
    format_warning,
)

__all__ = [
    "format_amount",
    "format_error",
    "format_hours",
    "format_info",
    "format_success",
    "format_table",
    "format_warning",
]
