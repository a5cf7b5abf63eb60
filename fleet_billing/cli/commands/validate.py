"""Validate tripsheet command."""

from pathlib import Path

import click

from fleet_billing.calculators.day_classifier import get_month_name
from fleet_billing.cli.error_handlers import DataValidationError, with_error_handling
from fleet_billing.cli.utils.formatters import (
    format_error,
    format_header,
    format_info,
    format_success,
    format_warning,
)
from fleet_billing.readers.tripsheet_reader import TripsheetReader
from fleet_billing.validators.tripsheet_validator import TripsheetValidator
from fleet_billing.validators.validation_report import ValidationSeverity

MAX_ISSUES_PER_SEVERITY = 20

_STYLES = {
    ValidationSeverity.ERROR: format_error,
    ValidationSeverity.WARNING: format_warning,
    ValidationSeverity.INFO: format_info,
}


@click.command(name="validate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--month", required=True, type=click.IntRange(1, 12), help="Month")
@click.option(
    "--year", required=True, type=click.IntRange(2000, 9999), help="Year"
)
@click.option(
    "--severity",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default="warning",
    show_default=True,
    help="Minimum severity level to display",
)
@click.pass_context
def validate(ctx: click.Context, file: Path, month: int, year: int, severity: str):
    """Check a tripsheet file for data quality issues.

    Errors (invalid times, odometer going backwards) give a non-zero exit
    code. Warnings (out-of-month or duplicate dates, working days without
    readings) are reported only.

    Example:
        fleet-billing validate tripsheet.csv --month 9 --year 2025
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False

    with with_error_handling(debug):
        severity_level = ValidationSeverity[severity.upper()]
        click.echo(
            format_info(f"Validating {file.name} for {get_month_name(month)} {year}")
        )

        records = TripsheetReader().read_records(file)
        report = TripsheetValidator().validate_entries(records, month, year)

        click.echo()
        click.echo(format_header("Validation Summary"))
        click.echo(f"Rows checked:  {len(records)}")
        click.echo(f"Errors:        {report.error_count}")
        click.echo(f"Warnings:      {report.warning_count}")
        click.echo(f"Info:          {report.info_count}")

        shown = report.filter(severity_level)
        if shown:
            click.echo()
            click.echo(f"Issues (showing {severity.upper()} and above):")
            click.echo("-" * 60)
            for level in sorted(_STYLES, reverse=True):
                issues = [issue for issue in shown if issue.severity == level]
                if not issues:
                    continue
                click.echo()
                click.echo(f"{level.name}S ({len(issues)}):")
                for issue in issues[:MAX_ISSUES_PER_SEVERITY]:
                    click.echo(_STYLES[level](f"  {issue}"))
                if len(issues) > MAX_ISSUES_PER_SEVERITY:
                    extra = len(issues) - MAX_ISSUES_PER_SEVERITY
                    click.echo(f"  ... and {extra} more")

        click.echo()
        if report.has_errors():
            raise DataValidationError(
                f"Validation failed with {report.error_count} error(s)",
                recovery_hint="Fix the rows listed above and run validate again",
            )
        elif report.warning_count > 0:
            click.echo(
                format_warning(
                    f"Validation completed with {report.warning_count} warning(s)"
                )
            )
        else:
            click.echo(format_success("Validation passed! No issues found."))
