"""Summarize tripsheet command."""

from pathlib import Path

import click

from fleet_billing.calculators.day_classifier import get_month_name
from fleet_billing.cli.error_handlers import with_error_handling
from fleet_billing.cli.utils.formatters import (
    format_header,
    format_info,
    format_optional,
    format_table,
    format_warning,
)
from fleet_billing.cli.utils.loading import load_and_aggregate, tripsheet_arguments
from fleet_billing.config.settings import get_config
from fleet_billing.utils.formatting import (
    format_indian_currency,
    format_indian_number,
    generate_serial_number,
)
from fleet_billing.utils.logging_utils import LogContext

ENTRY_HEADERS = [
    "Date",
    "Day",
    "Status",
    "Start KM",
    "Close KM",
    "KM",
    "Start",
    "Close",
    "Hours",
    "Extra",
    "Driver Extra",
]


@click.command(name="summarize")
@tripsheet_arguments
@click.option(
    "--sequence",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Sequence number for the tripsheet number",
)
@click.pass_context
def summarize(
    ctx: click.Context, file: Path, month: int, year: int, strict: bool, sequence: int
):
    """Recompute a tripsheet and show its monthly totals.

    Example:
        fleet-billing summarize tripsheet.csv --month 9 --year 2025
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False

    with with_error_handling(debug), LogContext(tripsheet_file=file.name):
        config = get_config()
        click.echo(
            format_info(f"Summarizing {file.name} for {get_month_name(month)} {year}")
        )

        data = load_and_aggregate(file, month, year, strict, config)
        summary = data.summary

        rows = [
            [
                entry.date.strftime("%d-%m-%Y"),
                (entry.day_of_week or "")[:3],
                entry.status.value,
                format_optional(entry.starting_km),
                format_optional(entry.closing_km),
                format_optional(entry.total_km),
                format_optional(entry.starting_time),
                format_optional(entry.closing_time),
                format_optional(entry.total_hours),
                format_optional(entry.extra_hours),
                format_optional(entry.driver_extra_hours),
            ]
            for entry in data.entries
        ]

        click.echo()
        click.echo(format_table(ENTRY_HEADERS, rows))

        outside = [
            e for e in data.entries if (e.date.year, e.date.month) != (year, month)
        ]
        if outside:
            click.echo()
            click.echo(
                format_warning(
                    f"{len(outside)} entries are dated outside "
                    f"{get_month_name(month)} {year}"
                )
            )

        click.echo()
        tripsheet_number = generate_serial_number(
            config.tripsheet_prefix, year, sequence
        )

        click.echo(format_header("Tripsheet Summary"))
        click.echo(f"Tripsheet:           {tripsheet_number}")
        click.echo(f"Working days:        {summary.total_working_days}")
        click.echo(f"Off days:            {summary.total_off_days}")
        click.echo(f"Pending days:        {summary.total_pending_days}")
        click.echo(f"Total KM:            {format_indian_number(summary.total_kms)}")
        click.echo(f"Total hours:         {summary.total_hours}")
        click.echo(f"Extra hours:         {summary.total_extra_hours}")
        click.echo(f"Driver extra hours:  {summary.total_driver_extra_hours}")
        click.echo(f"Fuel litres:         {summary.total_fuel_litres}")
        click.echo(
            f"Fuel amount:         {format_indian_currency(summary.total_fuel_amount)}"
        )
