"""Validate data command."""

import click

from src.cli.commands.common import (
    data_option,
    debug_option,
    init_command,
    load_booking_data,
)
from src.cli.error_handlers import DataValidationError, with_error_handling
from src.cli.utils.formatters import format_info, format_success, format_warning
from src.validators.booking_validator import BookingValidator
from src.validators.validation_report import ValidationReport, ValidationSeverity


@click.command(name="validate-data")
@data_option
@click.option(
    "--severity",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default="warning",
    help="Minimum severity level to display (default: warning)",
)
@debug_option
@click.pass_context
def validate_data(ctx: click.Context, data_path: str, severity: str, debug: bool):
    """Validate booking data quality.

    Checks for:
    - Inverted or missing booking times
    - References to unknown clients or projects
    - Custom projects without a rate
    - Bookings placed inside another booking's buffer zone

    Returns non-zero exit code if errors are found.

    Example:
        booking-cli validate-data --data bookings.json --severity info
    """
    with with_error_handling(debug):
        settings = init_command(ctx)
        data = load_booking_data(data_path, settings)

        click.echo(format_info(f"Validating {len(data.bookings)} booking(s)..."))
        if data.skipped_rows:
            click.echo(
                format_warning(f"{data.skipped_rows} row(s) could not be parsed")
            )

        validator = BookingValidator(
            buffer_hours=settings.buffer_hours, timezone=settings.calendar_tzinfo
        )
        report = validator.validate(data.bookings, data.clients, data.projects)

        minimum = ValidationSeverity[severity.upper()]
        shown = ValidationReport()
        for issue in report.issues:
            if issue.severity >= minimum:
                shown.issues.append(issue)

        click.echo()
        click.echo(shown.format())
        click.echo()

        if not report.is_valid():
            raise DataValidationError(
                report.summary(),
                recovery_hint="Fix the listed bookings at the source and re-export",
            )

        click.echo(format_success(f"Validation passed ({report.summary()})"))
