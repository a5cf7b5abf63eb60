"""Calendar helpers for classifying tripsheet days."""

import calendar
import datetime as dt
from typing import List

from fleet_billing.models.tripsheet import DayType

DAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def _sunday_first_index(date: dt.date) -> int:
    # date.weekday() is Monday=0; shift to Sunday=0 ... Saturday=6
    return (date.weekday() + 1) % 7


def get_day_type(date: dt.date) -> DayType:
    """Classify a date as a working day, Saturday or Sunday.

    Example:
        >>> get_day_type(dt.date(2025, 9, 7))
        <DayType.SUNDAY: 'sunday'>
    """
    index = _sunday_first_index(date)
    if index == 0:
        return DayType.SUNDAY
    if index == 6:
        return DayType.SATURDAY
    return DayType.WORKING


def get_day_name(date: dt.date) -> str:
    """Return the English name of the day of the week.

    Example:
        >>> get_day_name(dt.date(2025, 9, 1))
        'Monday'
    """
    return DAY_NAMES[_sunday_first_index(date)]


def get_month_name(month: int) -> str:
    """Return the English name of a month number.

    Raises:
        ValueError: If month is not between 1 and 12
    """
    if month < 1 or month > 12:
        raise ValueError("Month must be between 1 and 12")
    return MONTH_NAMES[month - 1]


def get_month_dates(year: int, month: int) -> List[dt.date]:
    """Return every calendar date of a month in order.

    Example:
        >>> len(get_month_dates(2024, 2))
        29
    """
    days_in_month = calendar.monthrange(year, month)[1]
    return [dt.date(year, month, day) for day in range(1, days_in_month + 1)]
