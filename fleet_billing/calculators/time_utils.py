"""Time calculation utilities for the fleet billing engine.

This module provides low-level utilities for time calculations including:
- Converting "HH:mm" clock strings to minutes since midnight
- Calculating elapsed hours between two clock times (with midnight rollover)
- Deriving billing extra hours and driver extra hours

Clock strings are assumed to be valid "HH:mm" values. Callers validate them
with ``is_valid_clock_time`` before calculating; malformed input is not
defended against here.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from fleet_billing.models.tripsheet import CLOCK_TIME_PATTERN

MINUTES_PER_DAY = 24 * 60

# Billing extra hours start above this many hours per day unless the
# vehicle type configures its own threshold.
DEFAULT_BASE_HOURS = Decimal("10")

# Driver overtime always starts above 12 hours, whatever the billing
# threshold of the vehicle type.
DRIVER_BASE_HOURS = Decimal("12")

_ONE_DECIMAL = Decimal("0.1")
_CLOCK_TIME_RE = re.compile(CLOCK_TIME_PATTERN)


def round_hours(hours: Decimal) -> Decimal:
    """Round an hour figure half-up to one decimal place.

    Example:
        >>> round_hours(Decimal("0.25"))
        Decimal('0.3')
    """
    return hours.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def parse_clock_time(value: str) -> int:
    """Convert an "HH:mm" clock string to minutes since midnight.

    Args:
        value: Clock time such as "08:30"

    Returns:
        Number of minutes since midnight (0-1439)

    Example:
        >>> parse_clock_time("09:30")
        570
        >>> parse_clock_time("23:59")
        1439
    """
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def calculate_elapsed_minutes(start_time: str, end_time: str) -> int:
    """Calculate minutes between two clock times.

    When the end time is earlier than the start time the shift is treated
    as crossing midnight and a full day is added to the end time.

    Example:
        >>> calculate_elapsed_minutes("08:00", "17:00")
        540
        >>> calculate_elapsed_minutes("23:00", "01:00")
        120
    """
    start_minutes = parse_clock_time(start_time)
    end_minutes = parse_clock_time(end_time)

    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    return end_minutes - start_minutes


def calculate_elapsed_hours(start_time: str, end_time: str) -> Decimal:
    """Calculate elapsed hours between two clock times.

    Args:
        start_time: Start time "HH:mm"
        end_time: End time "HH:mm"

    Returns:
        Elapsed hours rounded half-up to one decimal

    Example:
        >>> calculate_elapsed_hours("08:00", "23:00")
        Decimal('15.0')
        >>> calculate_elapsed_hours("23:00", "01:00")
        Decimal('2.0')
        >>> calculate_elapsed_hours("09:00", "09:10")
        Decimal('0.2')
    """
    minutes = calculate_elapsed_minutes(start_time, end_time)
    return round_hours(Decimal(minutes) / Decimal(60))


def calculate_extra_hours(
    total_hours: Union[int, Decimal],
    base_hours: Union[int, Decimal] = DEFAULT_BASE_HOURS,
) -> Decimal:
    """Calculate hours worked beyond a per-day threshold.

    Args:
        total_hours: Hours worked on the day
        base_hours: Threshold above which hours count as extra (default 10)

    Returns:
        Extra hours rounded to one decimal, never negative

    Example:
        >>> calculate_extra_hours(Decimal("12.5"))
        Decimal('2.5')
        >>> calculate_extra_hours(Decimal("8.0"))
        Decimal('0')
    """
    extra = round_hours(Decimal(total_hours) - Decimal(base_hours))
    return max(Decimal("0"), extra)


def calculate_driver_extra_hours(total_hours: Union[int, Decimal]) -> Decimal:
    """Calculate driver overtime hours above the fixed 12-hour threshold.

    Example:
        >>> calculate_driver_extra_hours(Decimal("13.0"))
        Decimal('1.0')
        >>> calculate_driver_extra_hours(Decimal("11.9"))
        Decimal('0')
    """
    return calculate_extra_hours(total_hours, DRIVER_BASE_HOURS)


def is_valid_clock_time(value: str) -> bool:
    """Check that a string is a valid "H:mm" or "HH:mm" clock time.

    Example:
        >>> is_valid_clock_time("8:05")
        True
        >>> is_valid_clock_time("24:00")
        False
    """
    return bool(_CLOCK_TIME_RE.match(value.strip()))


def format_clock_time(value: str) -> str:
    """Normalize a clock string to zero-padded "HH:mm".

    Example:
        >>> format_clock_time("8:5")
        '08:05'
        >>> format_clock_time("7")
        '07:00'
    """
    parts = [part.strip() for part in value.split(":")]
    hours = parts[0].zfill(2)
    minutes = (parts[1] if len(parts) > 1 and parts[1] else "00").zfill(2)
    return f"{hours}:{minutes}"
