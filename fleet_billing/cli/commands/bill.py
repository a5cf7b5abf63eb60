"""Generate invoice command."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

import click

from fleet_billing.calculators.billing_calculator import (
    calculate_billing,
    resolve_billing_rules,
)
from fleet_billing.calculators.day_classifier import get_month_name
from fleet_billing.cli.error_handlers import ProcessingError, with_error_handling
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
    load_rules,
    tripsheet_arguments,
)
from fleet_billing.config.settings import get_config
from fleet_billing.models.billing import BaseKmPolicy, RulesSource
from fleet_billing.utils.formatting import (
    format_indian_compact,
    format_indian_currency,
    generate_serial_number,
)
from fleet_billing.utils.logging_utils import LogContext


@click.command(name="bill")
@tripsheet_arguments
@click.option(
    "--rules",
    type=str,
    default=None,
    help=(
        "Vehicle type billing rules as inline JSON or a path to a JSON file "
        "(default rate table if omitted)"
    ),
)
@click.option(
    "--adjustments",
    type=AMOUNT,
    default=Decimal("0"),
    show_default=True,
    help="Manual adjustment added to the sub total (may be negative)",
)
@click.option(
    "--base-km-policy",
    type=click.Choice([p.value for p in BaseKmPolicy], case_sensitive=False),
    default=None,
    help="How included kilometers are determined (default from settings)",
)
@click.option("--vehicle", type=str, default=None, help="Vehicle number to print")
@click.option(
    "--sequence",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Sequence number for the bill number",
)
@click.pass_context
def bill(
    ctx: click.Context,
    file: Path,
    month: int,
    year: int,
    strict: bool,
    rules: Optional[str],
    adjustments: Decimal,
    base_km_policy: Optional[str],
    vehicle: Optional[str],
    sequence: int,
):
    """Calculate the monthly invoice for one vehicle's tripsheet.

    Example:
        fleet-billing bill tripsheet.csv --month 9 --year 2025 \\
            --rules '{"baseAmount": 50000, "baseDays": 20, "extraKmRate": 13}'
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False

    with with_error_handling(debug), LogContext(vehicle_number=vehicle):
        config = get_config()
        policy = (
            BaseKmPolicy(base_km_policy.lower())
            if base_km_policy
            else config.billing_base_km_policy
        )
        resolved = resolve_billing_rules(
            load_rules(rules), config.default_billing_rules()
        )

        click.echo(
            format_info(
                f"Billing {vehicle or file.name} for {get_month_name(month)} {year}"
            )
        )

        data = load_and_aggregate(
            file,
            month,
            year,
            strict,
            config,
            base_hours_per_day=resolved.extra_hours_threshold(
                config.billing_extra_hours_threshold
            ),
        )

        try:
            calculation = calculate_billing(
                data.summary,
                rules=resolved,
                adjustments=adjustments,
                base_km_policy=policy,
                kms_per_working_day=config.billing_kms_per_working_day,
                words_suffix=config.billing_words_suffix,
            )
        except ValueError as e:
            raise ProcessingError(
                str(e), recovery_hint="Reduce the negative --adjustments amount"
            ) from e

        bill_number = generate_serial_number(config.bill_prefix, year, sequence)

        click.echo()
        click.echo(format_header(f"Invoice {bill_number}"))
        if vehicle:
            click.echo(f"Vehicle:  {vehicle}")
        click.echo(f"Period:   {get_month_name(month)} {year}")
        if calculation.rules_source == RulesSource.DEFAULT:
            click.echo(
                format_warning("No usable billing rules, default rate table applied")
            )
        click.echo()

        c = calculation
        items = [
            ("Base amount", f"{c.base_days} days, {c.base_kms} km", c.base_amount),
            (
                "Extra days",
                f"{c.extra_days} x {format_indian_currency(c.extra_day_rate)}",
                c.extra_days_amount,
            ),
            (
                "Extra kilometers",
                f"{c.extra_kms} x {format_indian_currency(c.extra_km_rate)}",
                c.extra_kms_amount,
            ),
            (
                "Extra hours",
                f"{c.total_extra_hours} x {format_indian_currency(c.extra_hour_rate)}",
                c.extra_hours_amount,
            ),
            ("Sub total", "", c.sub_total),
        ]
        if c.adjustments:
            items.append(("Adjustments", "", c.adjustments))
        items.append(("Total", "", c.total_amount))

        click.echo(format_line_items(items))
        click.echo()
        click.echo(f"Working days: {c.total_working_days}   Total KM: {c.total_kms}")
        click.echo(f"Amount in words: {c.amount_in_words}")
        click.echo()
        click.echo(
            format_success(
                f"Total due: {format_indian_currency(c.total_amount)} "
                f"({format_indian_compact(c.total_amount)})"
            )
        )
