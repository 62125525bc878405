"""Show week availability command."""

import datetime as dt
from typing import Optional

import click

from src.aggregators.week_bookings import DisplayLabels, get_bookings_for_week
from src.availability.slot_classifier import (
    build_week_matrix,
    build_week_slots,
    get_week_dates,
)
from src.cli.commands.common import (
    data_option,
    debug_option,
    init_command,
    load_booking_data,
    parse_date,
)
from src.cli.error_handlers import with_error_handling
from src.cli.utils.formatters import format_info, format_success, format_table


@click.command(name="show-week")
@data_option
@click.option(
    "--date",
    "reference_date",
    type=str,
    default=None,
    callback=parse_date,
    help="Any day of the week to show (YYYY-MM-DD, default: today)",
)
@debug_option
@click.pass_context
def show_week(
    ctx: click.Context,
    data_path: str,
    reference_date: Optional[dt.date],
    debug: bool,
):
    """Show booked, buffer and free hour slots for a week.

    Example:
        booking-cli show-week --data bookings.json --date 2024-05-08
    """
    with with_error_handling(debug):
        settings = init_command(ctx)
        data = load_booking_data(data_path, settings)

        week_dates = get_week_dates(reference_date)
        bookings = get_bookings_for_week(
            week_dates,
            data.bookings,
            data.clients,
            data.projects,
            DisplayLabels.from_settings(settings),
        )
        days = build_week_slots(
            week_dates,
            bookings,
            start_hour=settings.calendar_start_hour,
            end_hour=settings.calendar_end_hour,
            buffer_hours=settings.buffer_hours,
        )

        click.echo(
            format_info(
                f"Week of {week_dates[0]:%Y-%m-%d} to {week_dates[-1]:%Y-%m-%d}"
            )
        )
        click.echo()
        click.echo(build_week_matrix(days).to_string())
        click.echo()

        if not bookings:
            click.echo(format_info("No bookings this week."))
            return

        rows = [
            [
                f"{booking.start_time:%a %H:%M}",
                f"{booking.end_time:%H:%M}",
                booking.title or "",
            ]
            for booking in sorted(bookings, key=lambda b: b.start_time)
        ]
        click.echo(format_table(["Start", "End", "Booking"], rows, max_width=60))
        click.echo()
        click.echo(format_success(f"Found {len(bookings)} booking(s)"))
