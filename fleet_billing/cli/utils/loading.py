"""Shared option decorators and loaders for CLI commands."""

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click

from fleet_billing.aggregators.tripsheet_aggregator import (
    AggregatedTripsheet,
    TripsheetAggregator,
)
from fleet_billing.cli.error_handlers import ConfigurationError, DataValidationError
from fleet_billing.config.settings import FleetBillingConfig
from fleet_billing.readers.tripsheet_reader import TripsheetReader
from fleet_billing.utils.formatting import parse_indian_number


def tripsheet_arguments(func: Callable) -> Callable:
    """Add the FILE argument and the --month/--year/--strict options."""
    func = click.option(
        "--strict",
        is_flag=True,
        default=False,
        help="Fail on the first invalid row instead of skipping it",
    )(func)
    func = click.option(
        "--year",
        required=True,
        type=click.IntRange(2000, 9999),
        help="Tripsheet year (e.g. 2025)",
    )(func)
    func = click.option(
        "--month",
        required=True,
        type=click.IntRange(1, 12),
        help="Tripsheet month (1-12)",
    )(func)
    func = click.argument(
        "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
    )(func)
    return func


class DecimalParamType(click.ParamType):
    """Click parameter type for rupee amounts such as ``1,500`` or ``₹2,000``."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            amount = parse_indian_number(str(value))
        except ValueError:
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        if not amount.is_finite():
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        return amount


AMOUNT = DecimalParamType()


def load_and_aggregate(
    file: Path,
    month: int,
    year: int,
    strict: bool,
    config: FleetBillingConfig,
    base_hours_per_day: Optional[Decimal] = None,
) -> AggregatedTripsheet:
    """Read a tripsheet file and aggregate it for the given month.

    Extra hours are counted above ``base_hours_per_day`` when given (a
    vehicle type's own threshold), else above the configured
    BILLING_EXTRA_HOURS_THRESHOLD.

    Raises:
        DataValidationError: If the file has no usable entries
    """
    entries = TripsheetReader(strict=strict).read_entries(file)
    if not entries:
        raise DataValidationError(
            f"No valid entries found in {file.name}",
            recovery_hint="Run 'fleet-billing validate' to see why rows were skipped",
        )

    if base_hours_per_day is None:
        base_hours_per_day = config.billing_extra_hours_threshold

    aggregator = TripsheetAggregator(base_hours_per_day=base_hours_per_day)
    return aggregator.aggregate(entries, month, year)


def load_rules(value: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse --rules, either a path to a JSON file or inline JSON.

    Raises:
        ConfigurationError: If the JSON is invalid or not an object
    """
    if value is None:
        return None

    try:
        if value.lstrip().startswith(("{", "[")):
            text = value
        else:
            text = Path(value).read_text(encoding="utf-8")
        rules = json.loads(text)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Could not read billing rules: {e}",
            recovery_hint="Pass a JSON object or a path to a .json file",
        ) from e

    if not isinstance(rules, dict):
        raise ConfigurationError(
            "Billing rules must be a JSON object",
            recovery_hint='e.g. {"baseAmount": 50000, "extraKmRate": 13}',
        )
    return rules
