"""Driver salary data models for the fleet billing engine."""

from decimal import Decimal
from typing import Optional, Union

from pydantic import ConfigDict, Field, field_validator, model_validator

from fleet_billing.models.base import BaseDataModel, to_decimal


class SalaryRules(BaseDataModel):
    """Company-wide driver salary rates.

    These are not tied to a vehicle type. Callers load them from settings
    and pass them to the salary calculator explicitly.

    Attributes:
        base_salary: Fixed monthly salary
        base_days: Working days covered by the base salary
        extra_day_rate: Pay per working day above base_days
        base_hours_per_day: Hours per day before overtime applies
        extra_hour_rate: Pay per overtime hour
    """

    base_salary: Decimal = Field(Decimal("20000"), ge=0)
    base_days: int = Field(22, ge=1)
    extra_day_rate: Decimal = Field(Decimal("909"), ge=0)
    base_hours_per_day: Decimal = Field(Decimal("12"), ge=1)
    extra_hour_rate: Decimal = Field(Decimal("80"), ge=0)

    @field_validator(
        "base_salary",
        "extra_day_rate",
        "base_hours_per_day",
        "extra_hour_rate",
        mode="before",
    )
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert numeric values to Decimal for precision."""
        return to_decimal(v)


class SalaryCalculation(BaseDataModel):
    """Itemized driver salary for one tripsheet month.

    ``total_salary`` is the gross figure. ``advance_deduction`` and
    ``net_salary`` are only changed by applying an advance deduction, which
    produces a new instance.

    Example:
        >>> calc = SalaryCalculation(
        ...     total_working_days=22,
        ...     base_days=22,
        ...     extra_days=0,
        ...     base_salary=Decimal("20000"),
        ...     extra_day_rate=Decimal("909"),
        ...     extra_days_amount=Decimal("0"),
        ...     total_hours=Decimal("264"),
        ...     total_driver_extra_hours=Decimal("0"),
        ...     extra_hour_rate=Decimal("80"),
        ...     extra_hours_amount=Decimal("0"),
        ...     total_salary=Decimal("20000"),
        ...     amount_in_words="Twenty Thousand Rupees Only",
        ... )
        >>> calc.net_salary
        Decimal('20000')
    """

    model_config = ConfigDict(frozen=True)

    total_working_days: int = Field(..., ge=0)
    base_days: int = Field(..., ge=1)
    extra_days: int = Field(..., ge=0)
    base_salary: Decimal = Field(..., ge=0)
    extra_day_rate: Decimal = Field(..., ge=0)
    extra_days_amount: Decimal = Field(..., ge=0)

    total_hours: Decimal = Field(..., ge=0)
    total_driver_extra_hours: Decimal = Field(..., ge=0)
    extra_hour_rate: Decimal = Field(..., ge=0)
    extra_hours_amount: Decimal = Field(..., ge=0)

    total_salary: Decimal = Field(..., ge=0)
    amount_in_words: str = Field(..., min_length=1)

    advance_deduction: Decimal = Field(Decimal("0"), ge=0)
    net_salary: Optional[Decimal] = Field(None, ge=0)
    net_amount_in_words: Optional[str] = Field(None)

    @model_validator(mode="before")
    @classmethod
    def default_net_to_gross(cls, data):
        """Default the net figures to the gross figures when not supplied."""
        if isinstance(data, dict):
            data = dict(data)
            if data.get("net_salary") is None:
                data["net_salary"] = data.get("total_salary")
            if data.get("net_amount_in_words") is None:
                data["net_amount_in_words"] = data.get("amount_in_words")
        return data
