"""Booking Calendar CLI.

This module provides a command-line interface for the booking calendar.
It includes commands for weekly availability, monthly client reports,
project costs and data validation.
"""

import click

from src.cli.commands.monthly_report import monthly_report
from src.cli.commands.project_cost import project_cost
from src.cli.commands.validate import validate_data
from src.cli.commands.week import show_week

__version__ = "1.0.0"


@click.group(
    help="Booking Calendar CLI - Weekly availability and monthly client billing"
)
@click.version_option(version=__version__)
@click.option(
    "--verbose", "-v", is_flag=True, default=False, help="Show log output"
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Booking Calendar CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(show_week)
cli.add_command(monthly_report)
cli.add_command(project_cost)
cli.add_command(validate_data)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
