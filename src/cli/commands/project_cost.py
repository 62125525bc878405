"""Project cost command."""

import click

from src.calculators.pricing_calculator import PricingPolicy, calculate_all_project_costs
from src.cli.commands.common import (
    data_option,
    debug_option,
    init_command,
    load_booking_data,
)
from src.cli.error_handlers import with_error_handling
from src.cli.utils.formatters import (
    format_amount,
    format_hours,
    format_info,
    format_table,
)


@click.command(name="project-cost")
@data_option
@debug_option
@click.pass_context
def project_cost(ctx: click.Context, data_path: str, debug: bool):
    """Show lifetime hours, resolved rate and cost of every project.

    Package projects are priced at the tier reached by all of their hours.

    Example:
        booking-cli project-cost --data bookings.json
    """
    with with_error_handling(debug):
        settings = init_command(ctx)
        data = load_booking_data(data_path, settings)

        costs = calculate_all_project_costs(
            data.bookings, data.projects, PricingPolicy.from_settings(settings)
        )

        if not costs:
            click.echo(format_info("No projects found."))
            return

        rows = []
        for project in data.projects:
            metrics = costs[project.id]
            rows.append(
                [
                    project.name,
                    project.billing_type,
                    format_hours(metrics.total_hours),
                    format_amount(metrics.price_per_hour),
                    format_amount(metrics.total_amount),
                ]
            )

        click.echo(
            format_table(["Project", "Billing", "Hours", "Rate/h", "Amount"], rows)
        )
