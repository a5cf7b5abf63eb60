"""Driver salary command."""

from decimal import Decimal
from pathlib import Path
from typing import Optional, Tuple

import click

from fleet_billing.calculators.day_classifier import get_month_name
from fleet_billing.calculators.salary_calculator import (
    apply_advance_deduction,
    calculate_salary,
)
from fleet_billing.cli.error_handlers import DataValidationError, with_error_handling
from fleet_billing.cli.utils.formatters import (
    format_header,
    format_info,
    format_line_items,
    format_success,
    format_warning,
)
from fleet_billing.cli.utils.loading import (
    AMOUNT,
    load_and_aggregate,
    tripsheet_arguments,
)
from fleet_billing.config.settings import get_config
from fleet_billing.utils.formatting import (
    format_indian_currency,
    generate_serial_number,
)
from fleet_billing.utils.logging_utils import LogContext


@click.command(name="salary")
@tripsheet_arguments
@click.option(
    "--advance",
    "advances",
    type=AMOUNT,
    multiple=True,
    help="Salary advance paid during the month (repeatable)",
)
@click.option("--driver", type=str, default=None, help="Driver name to print")
@click.option(
    "--sequence",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Sequence number for the payslip number",
)
@click.pass_context
def salary(
    ctx: click.Context,
    file: Path,
    month: int,
    year: int,
    strict: bool,
    advances: Tuple[Decimal, ...],
    driver: Optional[str],
    sequence: int,
):
    """Calculate the driver's salary for one tripsheet month.

    Example:
        fleet-billing salary tripsheet.csv --month 9 --year 2025 --advance 2000
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False

    with with_error_handling(debug), LogContext(driver_name=driver):
        config = get_config()
        click.echo(
            format_info(
                f"Salary for {driver or file.name}, {get_month_name(month)} {year}"
            )
        )

        data = load_and_aggregate(file, month, year, strict, config)
        calculation = calculate_salary(
            data.summary,
            rules=config.salary_rules(),
            words_suffix=config.salary_words_suffix,
        )
        if advances:
            try:
                calculation = apply_advance_deduction(
                    calculation, advances, words_suffix=config.salary_words_suffix
                )
            except ValueError as e:
                raise DataValidationError(
                    str(e), recovery_hint="Pass advances as positive amounts"
                ) from e

        payslip_number = generate_serial_number(config.salary_prefix, year, sequence)

        click.echo()
        click.echo(format_header(f"Payslip {payslip_number}"))
        if driver:
            click.echo(f"Driver:   {driver}")
        click.echo(f"Period:   {get_month_name(month)} {year}")
        click.echo()

        c = calculation
        items = [
            ("Base salary", f"{c.base_days} days", c.base_salary),
            (
                "Extra days",
                f"{c.extra_days} x {format_indian_currency(c.extra_day_rate)}",
                c.extra_days_amount,
            ),
            (
                "Extra hours",
                f"{c.total_driver_extra_hours} x "
                f"{format_indian_currency(c.extra_hour_rate)}",
                c.extra_hours_amount,
            ),
            ("Gross salary", "", c.total_salary),
        ]
        if advances:
            items.append(("Advances", f"{len(advances)} paid", -c.advance_deduction))
            items.append(("Net salary", "", c.net_salary))

        click.echo(format_line_items(items))
        click.echo()
        click.echo(f"Working days: {c.total_working_days}   Hours: {c.total_hours}")
        click.echo(f"Amount in words: {c.net_amount_in_words}")
        if c.advance_deduction > c.total_salary:
            click.echo(format_warning("Advances exceed the gross salary"))
        click.echo()
        click.echo(format_success(f"Net pay: {format_indian_currency(c.net_salary)}"))
