"""Output formatting utilities for CLI."""

from decimal import Decimal
from typing import List, Sequence

import click


def format_success(message: str) -> str:
    """Format a success message in green."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message in red."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message in yellow."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message in blue."""
    return click.style(f"ℹ {message}", fg="blue")


def format_amount(value: Decimal) -> str:
    """Format a money amount with thousands separators and two decimals.

    Example:
        >>> format_amount(Decimal("3400"))
        '3,400.00'
    """
    return f"{value:,.2f}"


def format_hours(value: Decimal) -> str:
    """Format an hour count with one decimal, e.g. ``"15.0h"``."""
    return f"{value:.1f}h"


def format_table(
    headers: Sequence[str], rows: Sequence[Sequence[object]], max_width: int = 40
) -> str:
    """Format rows as an ASCII table.

    Cells longer than ``max_width`` are truncated. Rows may be shorter than
    the header; missing cells render empty.

    Args:
        headers: Column headers
        rows: Data rows
        max_width: Maximum column width

    Returns:
        Table as a multi-line string, or "" without headers
    """
    if not headers:
        return ""

    cells: List[List[str]] = [
        [str(cell) for cell in row[: len(headers)]] for row in rows
    ]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    widths = [min(w, max_width) for w in widths]

    def render(values: Sequence[str]) -> str:
        padded = list(values) + [""] * (len(widths) - len(values))
        return "|" + "|".join(
            f" {value[:width]:<{width}} " for value, width in zip(padded, widths)
        ) + "|"

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [separator, render(list(headers)), separator]
    if cells:
        lines.extend(render(row) for row in cells)
        lines.append(separator)

    return "\n".join(lines)
