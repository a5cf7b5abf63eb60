"""Unit tests for shared CLI loaders."""

from decimal import Decimal

import click
import pytest

from fleet_billing.cli.error_handlers import ConfigurationError, DataValidationError
from fleet_billing.cli.utils.loading import AMOUNT, load_and_aggregate, load_rules
from fleet_billing.config import FleetBillingConfig


class TestAmountType:
    """Test the rupee amount parameter type."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1,500", "1500"),
            ("₹1,23,456.50", "123456.50"),
            ("-800", "-800"),
            ("12.5", "12.5"),
        ],
    )
    def test_convert(self, value, expected):
        """Test accepted amounts."""
        assert AMOUNT.convert(value, None, None) == Decimal(expected)

    @pytest.mark.parametrize("value", ["abc", "NaN", "inf"])
    def test_invalid(self, value):
        """Test rejected amounts."""
        with pytest.raises(click.BadParameter):
            AMOUNT.convert(value, None, None)


class TestLoadRules:
    """Test --rules parsing."""

    def test_none(self):
        """Test that no rules gives None."""
        assert load_rules(None) is None

    def test_inline_json(self):
        """Test inline JSON objects."""
        assert load_rules('{"baseAmount": 50000}') == {"baseAmount": 50000}

    def test_json_file(self, tmp_path):
        """Test reading a JSON file."""
        path = tmp_path / "rules.json"
        path.write_text('{"extraKmRate": 13}', encoding="utf-8")

        assert load_rules(str(path)) == {"extraKmRate": 13}

    def test_missing_file(self, tmp_path):
        """Test a path that does not exist."""
        with pytest.raises(ConfigurationError):
            load_rules(str(tmp_path / "missing.json"))

    @pytest.mark.parametrize("value", ["{not json", "[1, 2]"])
    def test_invalid(self, value):
        """Test malformed JSON and non-objects."""
        with pytest.raises(ConfigurationError):
            load_rules(value)


class TestLoadAndAggregate:
    """Test reading and aggregating in one step."""

    def test_aggregates_sample(self, tripsheet_csv):
        """Test the sample tripsheet totals."""
        data = load_and_aggregate(tripsheet_csv, 9, 2025, False, FleetBillingConfig())

        assert data.summary.total_working_days == 3
        assert data.summary.total_extra_hours == Decimal("8.0")

    def test_threshold_from_settings(self, tripsheet_csv, monkeypatch):
        """Test the configured extra hours threshold."""
        monkeypatch.setenv("BILLING_EXTRA_HOURS_THRESHOLD", "12")

        data = load_and_aggregate(tripsheet_csv, 9, 2025, False, FleetBillingConfig())

        assert data.summary.total_extra_hours == Decimal("4.0")

    def test_empty_file(self, tmp_path):
        """Test that a file without entries is a data error."""
        path = tmp_path / "empty.csv"
        path.write_text("Date\n", encoding="utf-8")

        with pytest.raises(DataValidationError, match="No valid entries"):
            load_and_aggregate(path, 9, 2025, False, FleetBillingConfig())
