"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from fleet_billing.cli.utils.formatters import format_error, format_warning
from fleet_billing.readers.tripsheet_reader import TripsheetReadError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to settings or billing rule configuration."""


class DataValidationError(CLIError):
    """Error related to tripsheet data validation."""


class ProcessingError(CLIError):
    """Error related to aggregation or calculation."""


# Exit codes
EXIT_CONFIGURATION = 1
EXIT_DATA_VALIDATION = 3
EXIT_PROCESSING = 4
EXIT_ABORTED = 130
EXIT_UNEXPECTED = 255


def _echo_with_hint(message: str, hint: Optional[str]) -> None:
    click.echo(format_error(message), err=True)
    if hint:
        click.echo(format_warning(f"Hint: {hint}"), err=True)


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Report an error to the user and choose the exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (1 configuration, 3 data, 4 processing, 130 cancelled,
        255 unexpected)
    """
    if isinstance(error, ConfigurationError):
        _echo_with_hint(f"Configuration Error: {error.message}", error.recovery_hint)
        return EXIT_CONFIGURATION

    elif isinstance(error, DataValidationError):
        _echo_with_hint(
            f"Data Validation Error: {error.message}", error.recovery_hint
        )
        return EXIT_DATA_VALIDATION

    elif isinstance(error, ProcessingError):
        _echo_with_hint(f"Processing Error: {error.message}", error.recovery_hint)
        return EXIT_PROCESSING

    elif isinstance(error, TripsheetReadError):
        _echo_with_hint(
            f"Tripsheet Error: {error}",
            "Check the file path, type and the Date column",
        )
        return EXIT_DATA_VALIDATION

    elif isinstance(error, ValidationError):
        _echo_with_hint(
            f"Invalid Data: {error.error_count()} validation error(s)", None
        )
        click.echo(str(error), err=True)
        return EXIT_DATA_VALIDATION

    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return EXIT_ABORTED

    else:
        click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
        click.echo(str(error), err=True)

        if debug:
            click.echo("\nFull stack trace:", err=True)
            click.echo(
                "".join(
                    traceback.format_exception(
                        type(error), error, error.__traceback__
                    )
                ),
                err=True,
            )
        else:
            click.echo(
                format_warning("\nRun with --debug flag for full stack trace"),
                err=True,
            )

        return EXIT_UNEXPECTED


def with_error_handling(debug: bool = False):
    """
    Context manager that turns exceptions into an exit code.

    Args:
        debug: Whether to show full stack traces

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """

    class ErrorHandler:
        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None and isinstance(exc_val, Exception):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False

    return ErrorHandler(debug)
