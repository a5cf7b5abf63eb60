"""Unit tests for billing and salary models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from fleet_billing.models import (
    BaseKmPolicy,
    BillingCalculation,
    BillingRules,
    SalaryCalculation,
    SalaryRules,
)


def _salary_calculation(**overrides) -> SalaryCalculation:
    data = dict(
        total_working_days=22,
        base_days=22,
        extra_days=0,
        base_salary=Decimal("20000"),
        extra_day_rate=Decimal("909"),
        extra_days_amount=Decimal("0"),
        total_hours=Decimal("264"),
        total_driver_extra_hours=Decimal("0"),
        extra_hour_rate=Decimal("80"),
        extra_hours_amount=Decimal("0"),
        total_salary=Decimal("20000"),
        amount_in_words="Twenty Thousand Rupees Only",
    )
    data.update(overrides)
    return SalaryCalculation(**data)


class TestBillingRules:
    """Test BillingRules validation."""

    def test_defaults_for_optional_fields(self):
        """Test default base days, kms and hours."""
        rules = BillingRules(
            base_amount=50000,
            extra_day_rate=2500,
            extra_km_rate=13,
            extra_hour_rate=250,
        )

        assert rules.base_days == 20
        assert rules.base_kms == 2000
        assert rules.base_hours_per_day == Decimal("10")
        assert rules.base_amount == Decimal("50000")

    def test_required_rates(self):
        """Test that rates without defaults are required."""
        with pytest.raises(ValidationError):
            BillingRules(base_amount=50000)

    @pytest.mark.parametrize(
        "field,value",
        [("base_amount", -1), ("base_days", 0), ("extra_km_rate", "-2")],
    )
    def test_invalid_values_rejected(self, field, value):
        """Test that negative rates and zero base days are rejected."""
        data = dict(
            base_amount=50000,
            extra_day_rate=2500,
            extra_km_rate=13,
            extra_hour_rate=250,
        )
        data[field] = value
        with pytest.raises(ValidationError):
            BillingRules(**data)


class TestBillingCalculation:
    """Test BillingCalculation immutability."""

    def test_calculation_is_frozen(self):
        """Test that invoices cannot be modified in place."""
        calc = BillingCalculation(
            total_working_days=20,
            base_days=20,
            extra_days=0,
            base_amount=Decimal("50000"),
            extra_day_rate=Decimal("2500"),
            extra_days_amount=Decimal("0"),
            total_kms=1500,
            base_kms=2000,
            extra_kms=0,
            extra_km_rate=Decimal("13"),
            extra_kms_amount=Decimal("0"),
            total_hours=Decimal("200"),
            base_hours_per_day=Decimal("10"),
            total_base_hours=Decimal("200"),
            total_extra_hours=Decimal("0"),
            extra_hour_rate=Decimal("250"),
            extra_hours_amount=Decimal("0"),
            sub_total=Decimal("50000"),
            total_amount=Decimal("50000"),
            amount_in_words="Fifty Thousand Only",
        )

        assert calc.base_km_policy == BaseKmPolicy.FLAT
        with pytest.raises(ValidationError):
            calc.total_amount = Decimal("1")


class TestSalaryModels:
    """Test SalaryRules and SalaryCalculation."""

    def test_salary_rule_defaults(self):
        """Test the company-wide default salary rates."""
        rules = SalaryRules()

        assert rules.base_salary == Decimal("20000")
        assert rules.base_days == 22
        assert rules.extra_day_rate == Decimal("909")
        assert rules.base_hours_per_day == Decimal("12")
        assert rules.extra_hour_rate == Decimal("80")

    def test_net_defaults_to_gross(self):
        """Test that net figures equal gross when no advance is applied."""
        calc = _salary_calculation()

        assert calc.advance_deduction == Decimal("0")
        assert calc.net_salary == Decimal("20000")
        assert calc.net_amount_in_words == "Twenty Thousand Rupees Only"

    def test_explicit_net_kept(self):
        """Test that explicitly supplied net figures are not overwritten."""
        calc = _salary_calculation(
            advance_deduction=Decimal("5000"),
            net_salary=Decimal("15000"),
            net_amount_in_words="Fifteen Thousand Rupees Only",
        )

        assert calc.net_salary == Decimal("15000")
        assert calc.net_amount_in_words == "Fifteen Thousand Rupees Only"
