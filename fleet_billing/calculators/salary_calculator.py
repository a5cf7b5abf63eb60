"""Driver salary calculator.

The salary is computed from the same tripsheet summary as the invoice but
with company-wide rates (SalaryRules) and the driver overtime total, which
uses a fixed 12-hour threshold instead of the vehicle's billing threshold.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional, Union

from fleet_billing.calculators.number_to_words import (
    RUPEES_ONLY,
    number_to_indian_words,
)
from fleet_billing.models.base import round_money, to_decimal
from fleet_billing.models.salary import SalaryCalculation, SalaryRules
from fleet_billing.models.tripsheet import TripsheetSummary
from fleet_billing.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)


@log_function_call
def calculate_salary(
    summary: TripsheetSummary,
    rules: Optional[SalaryRules] = None,
    words_suffix: str = RUPEES_ONLY,
) -> SalaryCalculation:
    """Calculate the gross driver salary for one tripsheet month.

    Formula:
        extra days       = max(0, working days - base days)
        extra days pay   = extra days x extra day rate
        extra hours pay  = driver extra hours x extra hour rate
        total salary     = base salary + extra days pay + extra hours pay

    Args:
        summary: Aggregated tripsheet totals
        rules: Salary rates (default: SalaryRules() with the standard rates)
        words_suffix: Ending for the amount in words

    Returns:
        SalaryCalculation with the gross figure; net equals gross until an
        advance deduction is applied

    Example:
        >>> summary = TripsheetSummary(
        ...     total_working_days=25, total_driver_extra_hours=Decimal("6.0")
        ... )
        >>> calculate_salary(summary).total_salary
        Decimal('23207.00')
    """
    rules = rules or SalaryRules()

    extra_days = max(0, summary.total_working_days - rules.base_days)
    extra_days_amount = round_money(extra_days * rules.extra_day_rate)
    extra_hours_amount = round_money(
        summary.total_driver_extra_hours * rules.extra_hour_rate
    )
    total_salary = round_money(
        rules.base_salary + extra_days_amount + extra_hours_amount
    )

    logger.info(
        f"Salary: {summary.total_working_days} days, "
        f"{summary.total_driver_extra_hours} driver extra hours -> {total_salary}"
    )

    return SalaryCalculation(
        total_working_days=summary.total_working_days,
        base_days=rules.base_days,
        extra_days=extra_days,
        base_salary=rules.base_salary,
        extra_day_rate=rules.extra_day_rate,
        extra_days_amount=extra_days_amount,
        total_hours=summary.total_hours,
        total_driver_extra_hours=summary.total_driver_extra_hours,
        extra_hour_rate=rules.extra_hour_rate,
        extra_hours_amount=extra_hours_amount,
        total_salary=total_salary,
        amount_in_words=number_to_indian_words(total_salary, suffix=words_suffix),
    )


def apply_advance_deduction(
    calculation: SalaryCalculation,
    advances: Iterable[Union[int, Decimal]],
    words_suffix: str = RUPEES_ONLY,
) -> SalaryCalculation:
    """Deduct paid salary advances from a gross salary for the net payout.

    The gross ``total_salary`` and its words are kept; ``advance_deduction``,
    ``net_salary`` and ``net_amount_in_words`` are set on the returned copy.
    The net payout never goes below zero.

    Args:
        calculation: Gross salary calculation
        advances: Amounts of the advances paid out for the month
        words_suffix: Ending for the net amount in words

    Returns:
        New SalaryCalculation with net figures

    Raises:
        ValueError: If any advance amount is negative

    Example:
        >>> net = apply_advance_deduction(calculation, [Decimal("2000"), 1000])
        >>> net.net_salary
        Decimal('20207.00')
    """
    amounts = [to_decimal(amount) for amount in advances]
    for amount in amounts:
        if amount < 0:
            raise ValueError(f"Advance amount must be non-negative, got {amount}")

    advance_deduction = round_money(sum(amounts, Decimal("0")))
    net_salary = max(Decimal("0.00"), calculation.total_salary - advance_deduction)

    if advance_deduction > calculation.total_salary:
        logger.warning(
            f"Advances ({advance_deduction}) exceed gross salary "
            f"({calculation.total_salary}); net payout set to zero"
        )

    data = calculation.model_dump()
    data.update(
        advance_deduction=advance_deduction,
        net_salary=net_salary,
        net_amount_in_words=number_to_indian_words(net_salary, suffix=words_suffix),
    )
    return SalaryCalculation(**data)
