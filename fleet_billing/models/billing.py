"""Billing data models for the fleet billing engine.

This module defines the per-vehicle-type BillingRules rate table and the
BillingCalculation invoice breakdown produced by the billing calculator.
"""

from decimal import Decimal
from enum import Enum
from typing import Union

from pydantic import ConfigDict, Field, field_validator

from fleet_billing.models.base import BaseDataModel, to_decimal


class BaseKmPolicy(str, Enum):
    """How the kilometers included in the base amount are determined.

    FLAT uses the rate table's ``base_kms`` for the whole month.
    PER_WORKING_DAY includes a fixed allowance for every working day.
    """

    FLAT = "flat"
    PER_WORKING_DAY = "per_working_day"


class RulesSource(str, Enum):
    """Where the rate table used for an invoice came from."""

    VEHICLE_TYPE = "vehicle_type"
    DEFAULT = "default"


class BillingRules(BaseDataModel):
    """Rate table of a vehicle type.

    Attributes:
        base_amount: Fixed monthly rental
        base_days: Working days included in the base amount
        extra_day_rate: Charge per working day above base_days
        base_kms: Kilometers included in the base amount
        extra_km_rate: Charge per kilometer above the included kilometers
        base_hours_per_day: Hours per day included before extra hours apply
        extra_hour_rate: Charge per extra hour

    Example:
        >>> rules = BillingRules(
        ...     base_amount=50000,
        ...     base_days=20,
        ...     extra_day_rate=2500,
        ...     base_kms=2000,
        ...     extra_km_rate=13,
        ...     base_hours_per_day=10,
        ...     extra_hour_rate=250,
        ... )
        >>> rules.extra_km_rate
        Decimal('13')
    """

    base_amount: Decimal = Field(..., ge=0, description="Fixed monthly rental")
    base_days: int = Field(20, ge=1, description="Days included in base amount")
    extra_day_rate: Decimal = Field(..., ge=0, description="Rate per extra day")
    base_kms: int = Field(2000, ge=0, description="Kilometers included")
    extra_km_rate: Decimal = Field(..., ge=0, description="Rate per extra km")
    base_hours_per_day: Decimal = Field(
        Decimal("10"), ge=1, description="Hours per day included"
    )
    extra_hour_rate: Decimal = Field(..., ge=0, description="Rate per extra hour")

    @field_validator(
        "base_amount",
        "extra_day_rate",
        "extra_km_rate",
        "base_hours_per_day",
        "extra_hour_rate",
        mode="before",
    )
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert numeric values to Decimal for precision."""
        return to_decimal(v)


class BillingCalculation(BaseDataModel):
    """Itemized vehicle-rental invoice for one tripsheet month.

    Every intermediate value is retained so the invoice can be audited line
    by line. Instances are immutable; corrections produce a new instance.
    """

    model_config = ConfigDict(frozen=True)

    total_working_days: int = Field(..., ge=0)
    base_days: int = Field(..., ge=1)
    extra_days: int = Field(..., ge=0)
    base_amount: Decimal = Field(..., ge=0)
    extra_day_rate: Decimal = Field(..., ge=0)
    extra_days_amount: Decimal = Field(..., ge=0)

    total_kms: int = Field(..., ge=0)
    base_kms: int = Field(..., ge=0)
    extra_kms: int = Field(..., ge=0)
    extra_km_rate: Decimal = Field(..., ge=0)
    extra_kms_amount: Decimal = Field(..., ge=0)

    total_hours: Decimal = Field(..., ge=0)
    base_hours_per_day: Decimal = Field(..., ge=1)
    total_base_hours: Decimal = Field(..., ge=0)
    total_extra_hours: Decimal = Field(..., ge=0)
    extra_hour_rate: Decimal = Field(..., ge=0)
    extra_hours_amount: Decimal = Field(..., ge=0)

    sub_total: Decimal = Field(..., ge=0)
    adjustments: Decimal = Field(Decimal("0"))
    total_amount: Decimal = Field(..., ge=0)
    amount_in_words: str = Field(..., min_length=1)

    base_km_policy: BaseKmPolicy = Field(BaseKmPolicy.FLAT)
    rules_source: RulesSource = Field(RulesSource.VEHICLE_TYPE)
