"""Calculator modules for the fleet billing engine."""

from fleet_billing.calculators.billing_calculator import (
    DEFAULT_BILLING_RULES,
    ResolvedBillingRules,
    apply_adjustments,
    calculate_base_kms,
    calculate_billing,
    resolve_billing_rules,
)
from fleet_billing.calculators.day_classifier import (
    get_day_name,
    get_day_type,
    get_month_dates,
    get_month_name,
)
from fleet_billing.calculators.number_to_words import (
    ONLY,
    RUPEES_ONLY,
    number_to_indian_words,
)
from fleet_billing.calculators.salary_calculator import (
    apply_advance_deduction,
    calculate_salary,
)
from fleet_billing.calculators.time_utils import (
    calculate_driver_extra_hours,
    calculate_elapsed_hours,
    calculate_elapsed_minutes,
    calculate_extra_hours,
    format_clock_time,
    is_valid_clock_time,
    parse_clock_time,
)

__all__ = [
    # billing_calculator
    "DEFAULT_BILLING_RULES",
    "ResolvedBillingRules",
    "apply_adjustments",
    "calculate_base_kms",
    "calculate_billing",
    "resolve_billing_rules",
    # day_classifier
    "get_day_name",
    "get_day_type",
    "get_month_dates",
    "get_month_name",
    # number_to_words
    "ONLY",
    "RUPEES_ONLY",
    "number_to_indian_words",
    # salary_calculator
    "apply_advance_deduction",
    "calculate_salary",
    # time_utils
    "calculate_driver_extra_hours",
    "calculate_elapsed_hours",
    "calculate_elapsed_minutes",
    "calculate_extra_hours",
    "format_clock_time",
    "is_valid_clock_time",
    "parse_clock_time",
]
