"""Monthly client report command."""

import datetime as dt
from decimal import Decimal

import click

from src.aggregators.monthly_metrics import calculate_monthly_client_metrics
from src.calculators.pricing_calculator import PricingPolicy
from src.cli.commands.common import (
    data_option,
    debug_option,
    init_command,
    load_booking_data,
    parse_month,
)
from src.cli.error_handlers import with_error_handling
from src.cli.utils.formatters import (
    format_amount,
    format_hours,
    format_info,
    format_success,
    format_table,
)


@click.command(name="monthly-report")
@data_option
@click.option(
    "--month",
    required=True,
    type=str,
    callback=parse_month,
    help="Month to report on (YYYY-MM format)",
)
@debug_option
@click.pass_context
def monthly_report(ctx: click.Context, data_path: str, month: dt.date, debug: bool):
    """Report hours, effective rate and amount per client for a month.

    Example:
        booking-cli monthly-report --data bookings.json --month 2024-05
    """
    with with_error_handling(debug):
        settings = init_command(ctx)
        data = load_booking_data(data_path, settings)

        recipe = calculate_monthly_client_metrics(
            data.bookings,
            data.projects,
            data.clients,
            month,
            PricingPolicy.from_settings(settings),
        )

        if not recipe:
            click.echo(format_info(f"No bookings in {month:%Y-%m}."))
            return

        rows = []
        total_hours = Decimal("0")
        total_amount = Decimal("0")
        for client_name in sorted(recipe):
            metrics = recipe[client_name]
            rows.append(
                [
                    client_name,
                    format_hours(metrics.total_hours),
                    format_amount(metrics.price_per_hour),
                    format_amount(metrics.total_amount),
                ]
            )
            total_hours += metrics.total_hours
            total_amount += metrics.total_amount

        click.echo(format_info(f"Client report for {month:%Y-%m}"))
        click.echo()
        click.echo(format_table(["Client", "Hours", "Rate/h", "Amount"], rows))
        click.echo()
        click.echo(
            format_success(
                f"{len(recipe)} client(s), {format_hours(total_hours)}, "
                f"total {format_amount(total_amount)}"
            )
        )
