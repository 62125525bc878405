"""Shared setup for CLI commands."""

import datetime as dt

import click
from pydantic import ValidationError

from src.cli.error_handlers import ConfigurationError
from src.config.logging_config import LoggingConfig, configure_logging, get_logger
from src.config.settings import CalendarSettings, get_config
from src.readers.booking_data_reader import BookingData, BookingDataReader

logger = get_logger(__name__)

data_option = click.option(
    "--data",
    "data_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON export with clients, projects and bookings",
)

debug_option = click.option(
    "--debug", is_flag=True, default=False, help="Show full stack traces on errors"
)


def init_command(ctx: click.Context) -> CalendarSettings:
    """Load settings and configure logging for a command run.

    Log output is limited to warnings unless the group was invoked with
    --verbose, in which case LOG_LEVEL / DEBUG from the settings apply.

    Raises:
        ConfigurationError: If the environment holds invalid settings
    """
    try:
        settings = get_config()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid settings: {e.error_count()} error(s)\n{e}",
            recovery_hint="Check CALENDAR_*, BUFFER_HOURS and PACKAGE_RATE_TIERS "
            "in your environment or .env file",
        )

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if verbose:
        configure_logging(LoggingConfig.from_settings(settings))
    else:
        configure_logging(LoggingConfig(log_level="WARNING"))

    logger.debug(
        f"Settings loaded: environment={settings.environment}, "
        f"timezone={settings.calendar_timezone}"
    )

    return settings


def load_booking_data(data_path: str, settings: CalendarSettings) -> BookingData:
    """Read the booking data export given on the command line.

    Timestamps are converted to the configured CALENDAR_TIMEZONE.
    """
    reader = BookingDataReader(timezone=settings.calendar_tzinfo)
    return reader.read_file(data_path)


def parse_date(ctx, param, value):
    """Click callback parsing an optional YYYY-MM-DD date option.

    Raises:
        click.BadParameter: If the value is not a valid date
    """
    if value is None:
        return None
    try:
        return dt.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date: {value}. Expected YYYY-MM-DD")


def parse_month(ctx, param, value) -> dt.date:
    """Click callback parsing a YYYY-MM option into the first day of the month.

    Raises:
        click.BadParameter: If the value is not a valid month
    """
    try:
        parsed = dt.datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise click.BadParameter(f"Invalid month: {value}. Expected YYYY-MM")
    return dt.date(parsed.year, parsed.month, 1)
