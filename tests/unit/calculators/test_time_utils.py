"""Unit tests for clock-time arithmetic."""

from decimal import Decimal

import pytest

from fleet_billing.calculators.time_utils import (
    calculate_driver_extra_hours,
    calculate_elapsed_hours,
    calculate_elapsed_minutes,
    calculate_extra_hours,
    format_clock_time,
    is_valid_clock_time,
    parse_clock_time,
    round_hours,
)


class TestParseClockTime:
    """Test conversion of HH:mm strings to minutes."""

    @pytest.mark.parametrize(
        "value,expected",
        [("00:00", 0), ("09:30", 570), ("8:05", 485), ("23:59", 1439)],
    )
    def test_minutes_since_midnight(self, value, expected):
        """Test parsing of clock strings."""
        assert parse_clock_time(value) == expected


class TestElapsedTime:
    """Test elapsed minutes and hours between clock times."""

    def test_same_day(self):
        """Test a normal daytime shift."""
        assert calculate_elapsed_minutes("08:00", "17:00") == 540

    def test_midnight_rollover(self):
        """Test that an end before the start crosses midnight."""
        assert calculate_elapsed_minutes("23:00", "01:00") == 120
        assert calculate_elapsed_hours("23:00", "01:00") == Decimal("2.0")

    def test_equal_times_are_zero(self):
        """Test that equal start and end times give zero hours."""
        assert calculate_elapsed_hours("08:00", "08:00") == Decimal("0.0")

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            ("08:00", "23:00", Decimal("15.0")),
            ("09:00", "09:10", Decimal("0.2")),
            ("09:00", "09:03", Decimal("0.1")),
            ("07:00", "20:30", Decimal("13.5")),
        ],
    )
    def test_hours_rounded_to_one_decimal(self, start, end, expected):
        """Test that elapsed hours are rounded half-up to one decimal."""
        assert calculate_elapsed_hours(start, end) == expected

    def test_round_hours_half_up(self):
        """Test half-up rounding of hours."""
        assert round_hours(Decimal("2.25")) == Decimal("2.3")
        assert round_hours(Decimal("2.24")) == Decimal("2.2")


class TestExtraHours:
    """Test billing and driver extra hours."""

    @pytest.mark.parametrize(
        "total,expected",
        [
            (Decimal("12.5"), Decimal("2.5")),
            (Decimal("10.0"), Decimal("0")),
            (Decimal("8.0"), Decimal("0")),
            (Decimal("10.1"), Decimal("0.1")),
        ],
    )
    def test_billing_extra_hours_above_ten(self, total, expected):
        """Test the default ten-hour billing threshold."""
        assert calculate_extra_hours(total) == expected

    def test_custom_threshold(self):
        """Test a vehicle-specific threshold."""
        assert calculate_extra_hours(Decimal("12.5"), Decimal("8")) == Decimal("4.5")

    @pytest.mark.parametrize(
        "total,expected",
        [
            (Decimal("11.9"), Decimal("0")),
            (Decimal("12.0"), Decimal("0")),
            (Decimal("13.0"), Decimal("1.0")),
            (Decimal("15.0"), Decimal("3.0")),
        ],
    )
    def test_driver_extra_hours_above_twelve(self, total, expected):
        """Test the fixed twelve-hour driver threshold."""
        assert calculate_driver_extra_hours(total) == expected

    def test_extra_hours_never_negative(self):
        """Test that short days never produce negative extra hours."""
        assert calculate_extra_hours(Decimal("0")) >= 0
        assert calculate_driver_extra_hours(Decimal("1.5")) >= 0


class TestClockTimeFormat:
    """Test validation and normalization of clock strings."""

    @pytest.mark.parametrize("value", ["00:00", "8:05", "23:59", " 07:30 "])
    def test_valid(self, value):
        """Test accepted clock strings."""
        assert is_valid_clock_time(value)

    @pytest.mark.parametrize("value", ["24:00", "12:60", "8.30", "", "noon"])
    def test_invalid(self, value):
        """Test rejected clock strings."""
        assert not is_valid_clock_time(value)

    @pytest.mark.parametrize(
        "value,expected", [("8:5", "08:05"), ("7", "07:00"), ("18:30", "18:30")]
    )
    def test_format_zero_pads(self, value, expected):
        """Test zero padding of hours and minutes."""
        assert format_clock_time(value) == expected
