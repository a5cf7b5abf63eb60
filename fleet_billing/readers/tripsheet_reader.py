"""Tripsheet reader for CSV and Excel files.

This module reads one vehicle's monthly tripsheet from a file with pandas
and converts each row into a validated TripEntry.
"""

import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from pydantic import ValidationError

from fleet_billing.calculators.time_utils import format_clock_time, is_valid_clock_time
from fleet_billing.models.tripsheet import TripEntry

logger = logging.getLogger(__name__)

# File column -> TripEntry field
COLUMN_MAP = {
    "Date": "date",
    "Status": "status",
    "Starting KM": "starting_km",
    "Closing KM": "closing_km",
    "Starting Time": "starting_time",
    "Closing Time": "closing_time",
    "Fuel Litres": "fuel_litres",
    "Fuel Amount": "fuel_amount",
    "From": "from_location",
    "To": "to_location",
    "Remarks": "remarks",
}

REQUIRED_COLUMNS = ("Date",)

EXCEL_SUFFIXES = {".xlsx", ".xls"}

_DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y", "%d/%m/%Y", "%d.%m.%Y")
_TIME_WITH_SECONDS = re.compile(r"^(\d{1,2}:\d{2}):\d{2}$")


class TripsheetReadError(Exception):
    """Raised when a tripsheet file cannot be read or a row is rejected."""


class TripsheetReader:
    """Reader for tripsheet files.

    Expected columns (header row, then one row per day):
    - Date: Entry date (YYYY-MM-DD, DD-MM-YYYY, DD/MM/YYYY or DD.MM.YYYY)
    - Status: working, off or pending (blank means pending)
    - Starting KM / Closing KM: Odometer readings
    - Starting Time / Closing Time: Clock times (HH:mm)
    - Fuel Litres / Fuel Amount: Fuel filled on the day
    - From / To / Remarks: Optional text

    Only the Date column is required. Rows without a date are treated as
    blank and skipped.

    Attributes:
        strict: Raise TripsheetReadError on the first invalid row instead
            of skipping it with a warning

    Example:
        >>> reader = TripsheetReader()
        >>> entries = reader.read_entries("tripsheet_2025_09.csv")
        >>> entries[0].status
        <EntryStatus.WORKING: 'working'>
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def read_dataframe(self, path: Union[str, Path]) -> pd.DataFrame:
        """Load a tripsheet file into a DataFrame of strings.

        Raises:
            TripsheetReadError: If the file is missing, of an unsupported
                type, unreadable, or lacks a required column
        """
        path = Path(path)
        if not path.exists():
            raise TripsheetReadError(f"Tripsheet file not found: {path}")

        suffix = path.suffix.lower()
        try:
            if suffix == ".csv":
                df = pd.read_csv(path, dtype=str, keep_default_na=False)
            elif suffix in EXCEL_SUFFIXES:
                df = pd.read_excel(path, dtype=str, keep_default_na=False)
            else:
                raise TripsheetReadError(
                    f"Unsupported file type '{suffix}' (expected .csv, .xlsx or .xls)"
                )
        except TripsheetReadError:
            raise
        except Exception as e:
            raise TripsheetReadError(f"Failed to read tripsheet {path}: {e}") from e

        df.columns = [str(column).strip() for column in df.columns]

        missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
        if missing:
            raise TripsheetReadError(
                f"Tripsheet {path.name} is missing column(s): {', '.join(missing)}"
            )

        logger.debug(f"Loaded {len(df)} rows from {path}")
        return df

    def read_records(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        """Read rows as raw records keyed by TripEntry field names.

        Values are cleaned (trimmed, blanks as None, dates parsed, times
        zero-padded) but not validated, so the records can be handed to
        the TripsheetValidator as they are.
        """
        df = self.read_dataframe(path)
        records = []
        for _, row in df.iterrows():
            record = self._clean_row(row.to_dict())
            if record is not None:
                records.append(record)
        return records

    def read_entries(self, path: Union[str, Path]) -> List[TripEntry]:
        """Read and parse a tripsheet file into TripEntry objects.

        Args:
            path: CSV or Excel file

        Returns:
            List of validated TripEntry objects in file order

        Raises:
            TripsheetReadError: If the file cannot be read, or a row is
                invalid and the reader is strict
        """
        path = Path(path)
        records = self.read_records(path)

        entries = []
        for idx, record in enumerate(records, start=1):
            entry = self._parse_record(record, idx)
            if entry is not None:
                entries.append(entry)

        logger.info(f"Parsed {len(entries)} of {len(records)} rows from {path.name}")
        return entries

    def _parse_record(self, record: Dict[str, Any], row: int) -> Optional[TripEntry]:
        """Build a TripEntry from a cleaned record, or None to skip it."""
        try:
            if not isinstance(record.get("date"), dt.date):
                raise ValueError(f"Invalid date format: {record.get('date')}")
            return TripEntry(**record)
        except (ValidationError, ValueError) as e:
            if self.strict:
                raise TripsheetReadError(f"Invalid tripsheet row {row}: {e}") from e
            logger.warning(f"Skipping invalid tripsheet row {row}: {e}")
            return None

    def _clean_row(self, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Map file columns to field names; None for a blank row."""
        record: Dict[str, Any] = {}
        for column, field in COLUMN_MAP.items():
            value = row.get(column)
            if value is None:
                continue
            text = str(value).strip()
            if text and text.lower() != "nan":
                record[field] = text

        if "date" not in record:
            return None

        record["date"] = self._parse_date(record["date"])

        if "status" in record:
            record["status"] = record["status"].lower()

        for field in ("starting_time", "closing_time"):
            if field in record:
                record[field] = self._normalize_time(record[field])

        return record

    @staticmethod
    def _parse_date(text: str) -> Union[dt.date, str]:
        """Parse a date in any supported format; unparseable text is returned."""
        # Excel cells read as strings carry a midnight time component
        candidate = text.split(" ")[0].split("T")[0]
        for fmt in _DATE_FORMATS:
            try:
                return dt.datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
        return text

    @staticmethod
    def _normalize_time(text: str) -> str:
        match = _TIME_WITH_SECONDS.match(text)
        if match:
            text = match.group(1)
        if is_valid_clock_time(text):
            return format_clock_time(text)
        return text
