"""Billing calculator for vehicle rental invoices.

This module implements the monthly invoice for one vehicle:
- Resolving the vehicle type's rate table, or the default table
- Extra working days above the days included in the base amount
- Extra kilometers above the kilometers included in the base amount
- Extra hours accumulated per day during aggregation
- Manual adjustments and the amount in words

Every intermediate value is kept on the resulting BillingCalculation so the
invoice can be printed as a line-item breakdown.
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, FrozenSet, Mapping, Optional, Union

from pydantic import ValidationError

from fleet_billing.calculators.number_to_words import ONLY, number_to_indian_words
from fleet_billing.models.base import round_money, to_decimal
from fleet_billing.models.billing import (
    BaseKmPolicy,
    BillingCalculation,
    BillingRules,
    RulesSource,
)
from fleet_billing.models.tripsheet import TripsheetSummary
from fleet_billing.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

# Rate table used when a vehicle type has no usable billing configuration
DEFAULT_BILLING_RULES = BillingRules(
    base_amount=Decimal("55000"),
    base_days=22,
    extra_day_rate=Decimal("2500"),
    base_kms=2000,
    extra_km_rate=Decimal("10"),
    base_hours_per_day=Decimal("10"),
    extra_hour_rate=Decimal("100"),
)

# Kilometers included per working day under BaseKmPolicy.PER_WORKING_DAY
DEFAULT_KMS_PER_WORKING_DAY = 100

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

RulesInput = Union["ResolvedBillingRules", BillingRules, Mapping[str, Any], None]


@dataclass
class ResolvedBillingRules:
    """Rate table chosen for an invoice, and where it came from.

    Attributes:
        rules: The rate table to bill with
        source: VEHICLE_TYPE when the vehicle's own table was usable,
            DEFAULT when the default table was substituted
        supplied: Fields the vehicle type set itself rather than taking
            them from the default table
    """

    rules: BillingRules
    source: RulesSource
    supplied: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_default(self) -> bool:
        """True when the default rate table was substituted."""
        return self.source == RulesSource.DEFAULT

    def extra_hours_threshold(self, fallback: Union[int, Decimal]) -> Decimal:
        """Per-day hours above which a working day earns billed extra hours.

        The vehicle type's own ``base_hours_per_day`` applies when it set
        one; otherwise the fallback (the fleet-wide threshold) does.

        Example:
            >>> resolved = resolve_billing_rules({"baseHoursPerDay": 8})
            >>> resolved.extra_hours_threshold(10)
            Decimal('8')
        """
        if "base_hours_per_day" in self.supplied:
            return self.rules.base_hours_per_day
        return to_decimal(fallback)


def _to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def resolve_billing_rules(
    rules: Any, default_rules: Optional[BillingRules] = None
) -> ResolvedBillingRules:
    """Resolve a vehicle type's billing configuration to a usable rate table.

    Accepted inputs:
    - A ResolvedBillingRules, returned unchanged
    - A BillingRules instance, used as-is
    - A mapping (snake_case or camelCase keys, e.g. a stored vehicle type's
      ``billingRules``); missing or null keys are taken from the default
      table, unknown keys are ignored
    - Anything else, including None, falls back to the default table

    A mapping that fails validation also falls back to the default table.
    Billing never fails because of missing configuration.

    Args:
        rules: The vehicle type's billing configuration
        default_rules: Table to substitute (default: DEFAULT_BILLING_RULES)

    Returns:
        ResolvedBillingRules with the table and its source

    Example:
        >>> resolved = resolve_billing_rules(None)
        >>> resolved.is_default
        True
        >>> resolved.rules.base_amount
        Decimal('55000')
    """
    defaults = default_rules or DEFAULT_BILLING_RULES

    if isinstance(rules, ResolvedBillingRules):
        return rules

    if isinstance(rules, BillingRules):
        return ResolvedBillingRules(
            rules=rules,
            source=RulesSource.VEHICLE_TYPE,
            supplied=frozenset(BillingRules.model_fields),
        )

    if isinstance(rules, Mapping):
        supplied = {
            _to_snake_case(str(key)): value
            for key, value in rules.items()
            if value is not None
        }
        known = {
            key: value
            for key, value in supplied.items()
            if key in BillingRules.model_fields
        }
        merged = defaults.model_dump()
        merged.update(known)
        try:
            return ResolvedBillingRules(
                rules=BillingRules(**merged),
                source=RulesSource.VEHICLE_TYPE,
                supplied=frozenset(known),
            )
        except ValidationError as e:
            logger.warning(
                f"Invalid billing rules, using default rate table: "
                f"{e.error_count()} validation error(s)"
            )
            return ResolvedBillingRules(rules=defaults, source=RulesSource.DEFAULT)

    logger.warning(
        f"No billing rules configured (got {type(rules).__name__}), "
        "using default rate table"
    )
    return ResolvedBillingRules(rules=defaults, source=RulesSource.DEFAULT)


def calculate_base_kms(
    total_working_days: int,
    rules: BillingRules,
    policy: BaseKmPolicy = BaseKmPolicy.FLAT,
    kms_per_working_day: int = DEFAULT_KMS_PER_WORKING_DAY,
) -> int:
    """Kilometers included in the base amount for the billing period.

    Example:
        >>> calculate_base_kms(25, DEFAULT_BILLING_RULES)
        2000
        >>> calculate_base_kms(25, DEFAULT_BILLING_RULES, BaseKmPolicy.PER_WORKING_DAY)
        2500
    """
    if policy == BaseKmPolicy.PER_WORKING_DAY:
        return total_working_days * kms_per_working_day
    return rules.base_kms


@log_function_call
def calculate_billing(
    summary: TripsheetSummary,
    rules: RulesInput = None,
    adjustments: Union[int, Decimal] = Decimal("0"),
    base_km_policy: BaseKmPolicy = BaseKmPolicy.FLAT,
    kms_per_working_day: int = DEFAULT_KMS_PER_WORKING_DAY,
    words_suffix: str = ONLY,
    default_rules: Optional[BillingRules] = None,
) -> BillingCalculation:
    """Calculate the itemized monthly invoice for one tripsheet.

    Steps:
    1. Extra days = working days above base days, times the extra day rate
    2. Extra kms = kms above the included kms, times the extra km rate
    3. Extra hours amount = aggregated extra hours times the extra hour rate
    4. Sub total = base amount + the three extra amounts
    5. Total = sub total + adjustments
    6. Amount in words

    Args:
        summary: Aggregated tripsheet totals
        rules: Vehicle type rate table, or rules already resolved with
            resolve_billing_rules; missing or malformed rules are replaced
            by the default table
        adjustments: Manual correction added to the sub total
        base_km_policy: How included kilometers are determined
        kms_per_working_day: Allowance for BaseKmPolicy.PER_WORKING_DAY
        words_suffix: Ending for the amount in words
        default_rules: Table to substitute for missing rules

    Returns:
        BillingCalculation with the complete breakdown

    Raises:
        ValueError: If adjustments would make the total negative

    Example:
        >>> summary = TripsheetSummary(
        ...     total_working_days=25,
        ...     total_kms=2600,
        ...     total_hours=Decimal("270"),
        ...     total_extra_hours=Decimal("8"),
        ... )
        >>> rules = BillingRules(
        ...     base_amount=50000, base_days=20, extra_day_rate=2500,
        ...     base_kms=2000, extra_km_rate=13, extra_hour_rate=250,
        ... )
        >>> calculate_billing(summary, rules).total_amount
        Decimal('72300.00')
    """
    resolved = resolve_billing_rules(rules, default_rules)
    table = resolved.rules

    # Days
    total_working_days = summary.total_working_days
    extra_days = max(0, total_working_days - table.base_days)
    extra_days_amount = round_money(extra_days * table.extra_day_rate)

    # Kilometers
    base_kms = calculate_base_kms(
        total_working_days, table, base_km_policy, kms_per_working_day
    )
    extra_kms = max(0, summary.total_kms - base_kms)
    extra_kms_amount = round_money(extra_kms * table.extra_km_rate)

    # Hours: extra hours were accumulated per entry during aggregation
    total_base_hours = total_working_days * table.base_hours_per_day
    extra_hours_amount = round_money(
        summary.total_extra_hours * table.extra_hour_rate
    )

    # Totals
    sub_total = round_money(
        table.base_amount + extra_days_amount + extra_kms_amount + extra_hours_amount
    )
    adjustments = round_money(to_decimal(adjustments))
    total_amount = sub_total + adjustments
    if total_amount < 0:
        raise ValueError(
            f"Adjustments ({adjustments}) cannot reduce the total below zero "
            f"(sub total {sub_total})"
        )

    logger.info(
        f"Billing: {total_working_days} days, {summary.total_kms} km, "
        f"{summary.total_extra_hours} extra hours -> {total_amount} "
        f"({resolved.source.value} rates, {base_km_policy.value} base kms)"
    )

    return BillingCalculation(
        total_working_days=total_working_days,
        base_days=table.base_days,
        extra_days=extra_days,
        base_amount=table.base_amount,
        extra_day_rate=table.extra_day_rate,
        extra_days_amount=extra_days_amount,
        total_kms=summary.total_kms,
        base_kms=base_kms,
        extra_kms=extra_kms,
        extra_km_rate=table.extra_km_rate,
        extra_kms_amount=extra_kms_amount,
        total_hours=summary.total_hours,
        base_hours_per_day=table.base_hours_per_day,
        total_base_hours=total_base_hours,
        total_extra_hours=summary.total_extra_hours,
        extra_hour_rate=table.extra_hour_rate,
        extra_hours_amount=extra_hours_amount,
        sub_total=sub_total,
        adjustments=adjustments,
        total_amount=total_amount,
        amount_in_words=number_to_indian_words(total_amount, suffix=words_suffix),
        base_km_policy=base_km_policy,
        rules_source=resolved.source,
    )


def apply_adjustments(
    calculation: BillingCalculation,
    adjustments: Union[int, Decimal],
    words_suffix: str = ONLY,
) -> BillingCalculation:
    """Return a copy of an invoice with a new manual adjustment.

    The total and the amount in words are recomputed from the unchanged
    sub total; every other line item is kept.

    Args:
        calculation: The existing invoice
        adjustments: Replacement adjustment (not added to the old one)
        words_suffix: Ending for the amount in words

    Returns:
        New BillingCalculation

    Raises:
        ValueError: If adjustments would make the total negative

    Example:
        >>> corrected = apply_adjustments(calculation, Decimal("-300"))
        >>> corrected.total_amount
        Decimal('72000.00')
    """
    adjustments = round_money(to_decimal(adjustments))
    total_amount = calculation.sub_total + adjustments
    if total_amount < 0:
        raise ValueError(
            f"Adjustments ({adjustments}) cannot reduce the total below zero "
            f"(sub total {calculation.sub_total})"
        )

    logger.info(
        f"Adjusting invoice total from {calculation.total_amount} to {total_amount}"
    )

    data = calculation.model_dump()
    data.update(
        adjustments=adjustments,
        total_amount=total_amount,
        amount_in_words=number_to_indian_words(total_amount, suffix=words_suffix),
    )
    return BillingCalculation(**data)
