"""Unit tests for Indian-English amount in words."""

from decimal import Decimal

import pytest

from fleet_billing.calculators.number_to_words import (
    ONLY,
    RUPEES_ONLY,
    number_to_indian_words,
)


class TestNumberToIndianWords:
    """Test rendering of amounts with Indian grouping."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, "Zero Only"),
            (7, "Seven Only"),
            (15, "Fifteen Only"),
            (40, "Forty Only"),
            (99, "Ninety Nine Only"),
            (100, "One Hundred Only"),
            (1000, "One Thousand Only"),
            (1005, "One Thousand Five Only"),
            (100000, "One Lakh Only"),
            (72300, "Seventy Two Thousand Three Hundred Only"),
            (10000000, "One Crore Only"),
            (
                12345678,
                "One Crore Twenty Three Lakh Forty Five Thousand "
                "Six Hundred Seventy Eight Only",
            ),
        ],
    )
    def test_amounts(self, amount, expected):
        """Test amounts across the crore, lakh and thousand groups."""
        assert number_to_indian_words(amount) == expected

    def test_large_crore_counts(self):
        """Test that crore counts above ninety nine are grouped again."""
        assert (
            number_to_indian_words(1_50_00_00_000)
            == "One Hundred Fifty Crore Only"
        )

    def test_rupees_only_suffix(self):
        """Test the payslip ending."""
        assert (
            number_to_indian_words(23207, suffix=RUPEES_ONLY)
            == "Twenty Three Thousand Two Hundred Seven Rupees Only"
        )

    def test_fraction_dropped_by_default(self):
        """Test that paisa are ignored unless requested."""
        assert number_to_indian_words(Decimal("1500.99")) == (
            "One Thousand Five Hundred Only"
        )

    def test_include_paisa(self):
        """Test rendering of paisa before the final Only."""
        assert (
            number_to_indian_words(Decimal("1500.50"), RUPEES_ONLY, include_paisa=True)
            == "One Thousand Five Hundred Rupees and Fifty Paisa Only"
        )

    def test_include_paisa_rounds_up_to_next_rupee(self):
        """Test that 99.5 paisa carries into the rupees."""
        assert (
            number_to_indian_words(Decimal("9.995"), ONLY, include_paisa=True)
            == "Ten Only"
        )

    def test_negative_amount_rejected(self):
        """Test that negative amounts raise ValueError."""
        with pytest.raises(ValueError):
            number_to_indian_words(-1)
