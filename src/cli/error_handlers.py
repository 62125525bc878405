"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click

from src.cli.utils.formatters import format_error, format_warning
from src.readers.booking_data_reader import BookingDataError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""


class DataValidationError(CLIError):
    """Error related to invalid booking data."""


class ProcessingError(CLIError):
    """Error raised while computing a report."""


# Exit codes by error category
_EXIT_CODES = (
    (ConfigurationError, "Configuration Error", 1),
    (DataValidationError, "Data Validation Error", 3),
    (ProcessingError, "Processing Error", 4),
)


def handle_cli_error(error: BaseException, debug: bool = False) -> int:
    """
    Report an error to the user and pick the process exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        1 configuration, 2 unreadable input, 3 invalid data, 4 processing,
        130 cancelled, 255 anything else
    """
    for error_type, label, exit_code in _EXIT_CODES:
        if isinstance(error, error_type):
            click.echo(format_error(f"{label}: {error.message}"))
            if error.recovery_hint:
                click.echo(format_warning(f"Hint: {error.recovery_hint}"))
            return exit_code

    if isinstance(error, BookingDataError):
        click.echo(format_error(f"Input Error: {error}"))
        click.echo(
            format_warning("Hint: Pass a JSON export with clients, projects and bookings")
        )
        return 2

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))
    if debug:
        click.echo("\nFull stack trace:")
        click.echo(
            "".join(traceback.format_exception(type(error), error, error.__traceback__))
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))

    return 255


class _ErrorHandler:
    """Context manager translating exceptions into exit codes."""

    def __init__(self, debug: bool):
        self.debug = debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is not None and not isinstance(exc_val, SystemExit):
            sys.exit(handle_cli_error(exc_val, self.debug))
        return False


def with_error_handling(debug: bool = False) -> _ErrorHandler:
    """
    Wrap a command body so errors become messages and exit codes.

    Example:
        @click.command()
        @click.option('--debug', is_flag=True)
        def my_command(debug):
            with with_error_handling(debug):
                ...
    """
    return _ErrorHandler(debug)
