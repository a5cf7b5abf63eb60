"""Intake validation for tripsheet entries.

Entries can be checked before they become TripEntry models (raw records as
read from a file, keyed by TripEntry field names) or after. Field checks
report errors; month-level checks report warnings that never block
aggregation.
"""

import datetime as dt
import logging
from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from fleet_billing.calculators.time_utils import is_valid_clock_time
from fleet_billing.models.tripsheet import EntryStatus, TripEntry
from fleet_billing.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

EntryInput = Union[TripEntry, Mapping[str, Any]]

_TIME_FIELDS = ("starting_time", "closing_time")
_NUMBER_FIELDS = ("starting_km", "closing_km", "fuel_litres", "fuel_amount")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _status_value(status: Any) -> str:
    return str(getattr(status, "value", status)).strip().lower()


def _parse_date(value: Any) -> Optional[dt.date]:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _parse_number(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        return None


class TripsheetValidator:
    """Validator for one month of trip entries.

    Errors:
        - Date missing or not a date
        - Status other than working, off or pending
        - Start or closing time not in "HH:mm" form
        - Negative or non-numeric odometer and fuel values
        - Closing odometer below starting odometer

    Warnings:
        - Entry dated outside the tripsheet month
        - More than one entry for the same date
        - Working entry with neither odometer nor clock readings

    Example:
        >>> validator = TripsheetValidator()
        >>> report = validator.validate_entries(entries, month=9, year=2025)
        >>> if not report.is_valid():
        ...     print(report.format())
    """

    def validate_entry(
        self, entry: EntryInput, row_number: Optional[int] = None
    ) -> ValidationReport:
        """Run field checks on a single entry.

        Args:
            entry: TripEntry or raw record keyed by TripEntry field names
            row_number: Optional row number for context in messages

        Returns:
            ValidationReport with any field errors
        """
        record = self._as_record(entry)
        report = ValidationReport()
        context: Dict[str, Any] = {}
        if row_number is not None:
            context["row"] = row_number

        entry_date = _parse_date(record.get("date"))
        if entry_date is None:
            report.add_error("date", "Date is missing or invalid", record.get("date"))
        else:
            context["date"] = entry_date.isoformat()

        status = record.get("status")
        if not _is_blank(status):
            valid_statuses = {s.value for s in EntryStatus}
            if _status_value(status) not in valid_statuses:
                report.add_error(
                    "status",
                    f"Status must be one of: {', '.join(sorted(valid_statuses))}",
                    status,
                )

        for field in _TIME_FIELDS:
            value = record.get(field)
            if not _is_blank(value) and not is_valid_clock_time(str(value)):
                report.add_error(field, "Time must be in HH:mm format", value)

        numbers: Dict[str, Decimal] = {}
        for field in _NUMBER_FIELDS:
            value = record.get(field)
            if _is_blank(value):
                continue
            number = _parse_number(value)
            if number is None or not number.is_finite():
                report.add_error(field, "Value must be a number", value)
            elif number < 0:
                report.add_error(field, "Value must be non-negative", value)
            else:
                numbers[field] = number

        if "starting_km" in numbers and "closing_km" in numbers:
            if numbers["closing_km"] < numbers["starting_km"]:
                report.add_error(
                    "closing_km",
                    f"Closing km is below starting km ({numbers['starting_km']})",
                    record.get("closing_km"),
                )

        if context:
            for issue in report.issues:
                issue.context = {**context, **(issue.context or {})}

        return report

    def validate_entries(
        self, entries: Iterable[EntryInput], month: int, year: int
    ) -> ValidationReport:
        """Validate all entries of a tripsheet month.

        Args:
            entries: TripEntry models or raw records
            month: Tripsheet month (1-12)
            year: Tripsheet year

        Returns:
            ValidationReport with field errors and month-level warnings
        """
        records = [self._as_record(entry) for entry in entries]
        report = ValidationReport()

        for idx, record in enumerate(records, start=1):
            report.merge(self.validate_entry(record, row_number=idx))

        dates: List[dt.date] = []
        for idx, record in enumerate(records, start=1):
            entry_date = _parse_date(record.get("date"))
            if entry_date is None:
                continue
            dates.append(entry_date)
            context = {"row": idx, "date": entry_date.isoformat()}

            if (entry_date.year, entry_date.month) != (year, month):
                report.add_warning(
                    "date",
                    f"Entry is outside the tripsheet month {year}-{month:02d}",
                    entry_date,
                    context,
                )

            if self._is_working(record.get("status")) and not self._has_readings(
                record
            ):
                report.add_warning(
                    "status",
                    "Working entry has no odometer or time readings",
                    record.get("status"),
                    context,
                )

        for entry_date, count in sorted(Counter(dates).items()):
            if count > 1:
                report.add_warning(
                    "date",
                    f"Date appears in {count} entries",
                    entry_date,
                    {"date": entry_date.isoformat()},
                )

        logger.info(
            f"Validated {len(records)} entries for {year}-{month:02d}: "
            f"{report.summary()}"
        )
        return report

    @staticmethod
    def _as_record(entry: EntryInput) -> Mapping[str, Any]:
        if isinstance(entry, TripEntry):
            return entry.model_dump()
        return entry

    @staticmethod
    def _is_working(status: Any) -> bool:
        if _is_blank(status):
            return False
        return _status_value(status) == EntryStatus.WORKING.value

    @staticmethod
    def _has_readings(record: Mapping[str, Any]) -> bool:
        fields = ("starting_km", "closing_km") + _TIME_FIELDS
        return any(not _is_blank(record.get(field)) for field in fields)
