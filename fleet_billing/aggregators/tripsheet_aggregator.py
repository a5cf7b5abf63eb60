"""Tripsheet aggregator for recomputing entries and monthly totals.

This module folds one vehicle's daily trip entries into a TripsheetSummary.
Derived entry fields are recomputed from the raw readings on every pass, so
stale values never survive a change to odometer or clock readings.

Aggregation is a pure transform: input entries are never modified, and new
entries are returned alongside the summary.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from fleet_billing.calculators.day_classifier import get_day_name, get_day_type
from fleet_billing.calculators.time_utils import (
    DEFAULT_BASE_HOURS,
    calculate_driver_extra_hours,
    calculate_elapsed_hours,
    calculate_extra_hours,
)
from fleet_billing.models.tripsheet import (
    DayType,
    EntryStatus,
    TripEntry,
    Tripsheet,
    TripsheetSummary,
)
from fleet_billing.utils.logging_utils import LogContext, log_function_call

logger = logging.getLogger(__name__)


@dataclass
class AggregatedTripsheet:
    """Container for recomputed entries and their summary.

    Attributes:
        entries: New entries with derived fields recomputed, sorted by date
        summary: Month-level totals over the entries

    Example:
        >>> data = AggregatedTripsheet(entries=[entry1, entry2], summary=summary)
        >>> data.summary.total_working_days
        2
    """

    entries: List[TripEntry]
    summary: TripsheetSummary


def recalculate_entry(
    entry: TripEntry, base_hours_per_day: Union[int, Decimal] = DEFAULT_BASE_HOURS
) -> TripEntry:
    """Return a copy of an entry with its derived fields recomputed.

    Day name and day type are filled from the date when unset. Kilometers
    and hours are computed when the readings are present and either the day
    type or the status is ``working``, so a day worked on a Saturday or
    Sunday still carries its kilometers and hours. Driver extra hours
    additionally require status ``working``. Derived values that cannot be
    computed are cleared.

    Args:
        entry: Entry with raw readings
        base_hours_per_day: Billing threshold for extra hours (default 10)

    Returns:
        New TripEntry with derived fields set

    Example:
        >>> entry = TripEntry(
        ...     date=dt.date(2025, 9, 1),
        ...     status=EntryStatus.WORKING,
        ...     starting_time="07:00",
        ...     closing_time="20:30",
        ... )
        >>> recalculate_entry(entry).driver_extra_hours
        Decimal('1.5')
    """
    day_of_week = entry.day_of_week or get_day_name(entry.date)
    day_type = entry.day_type or get_day_type(entry.date)

    total_km: Optional[int] = None
    total_hours: Optional[Decimal] = None
    extra_hours: Optional[Decimal] = None
    driver_extra_hours: Optional[Decimal] = None

    if day_type == DayType.WORKING or entry.status == EntryStatus.WORKING:
        if entry.starting_km is not None and entry.closing_km is not None:
            # Readings are whole kilometers by the time they reach the model
            total_km = entry.closing_km - entry.starting_km

        if entry.starting_time and entry.closing_time:
            total_hours = calculate_elapsed_hours(
                entry.starting_time, entry.closing_time
            )
            extra_hours = calculate_extra_hours(total_hours, base_hours_per_day)

            if entry.status == EntryStatus.WORKING:
                driver_extra_hours = calculate_driver_extra_hours(total_hours)

    return entry.model_copy(
        update={
            "day_of_week": day_of_week,
            "day_type": day_type,
            "total_km": total_km,
            "total_hours": total_hours,
            "extra_hours": extra_hours,
            "driver_extra_hours": driver_extra_hours,
        }
    )


def summarize_entries(entries: Iterable[TripEntry]) -> TripsheetSummary:
    """Fold entries into month-level totals.

    Day counts bucket entries by status (not day type, so a working Sunday
    counts as a working day and adds its kilometers and hours). Kilometer
    and hour totals only include working entries; fuel totals include every
    entry.

    Args:
        entries: Entries whose derived fields are already computed

    Returns:
        TripsheetSummary with all totals (zero for no entries)
    """
    entries = list(entries)
    working = [e for e in entries if e.status == EntryStatus.WORKING]
    off = [e for e in entries if e.status == EntryStatus.OFF]
    pending = [e for e in entries if e.status == EntryStatus.PENDING]

    zero = Decimal("0")

    return TripsheetSummary(
        total_working_days=len(working),
        total_off_days=len(off),
        total_pending_days=len(pending),
        total_kms=sum(e.total_km or 0 for e in working),
        total_hours=sum((e.total_hours or zero for e in working), zero),
        total_extra_hours=sum((e.extra_hours or zero for e in working), zero),
        total_driver_extra_hours=sum(
            (e.driver_extra_hours or zero for e in working), zero
        ),
        total_fuel_litres=sum((e.fuel_litres or zero for e in entries), zero),
        total_fuel_amount=sum((e.fuel_amount or zero for e in entries), zero),
    )


class TripsheetAggregator:
    """Recomputes trip entries and aggregates them into a monthly summary.

    The aggregator:
    1. Recomputes every entry's derived fields from its raw readings
    2. Warns about entries dated outside the tripsheet's month
    3. Sorts entries by date for display
    4. Folds the entries into a TripsheetSummary

    Running it twice over the same raw readings yields identical results.

    Attributes:
        base_hours_per_day: Billing threshold for per-day extra hours

    Example:
        >>> aggregator = TripsheetAggregator()
        >>> data = aggregator.aggregate(entries, month=9, year=2025)
        >>> data.summary.total_kms
        2600
    """

    def __init__(self, base_hours_per_day: Union[int, Decimal] = DEFAULT_BASE_HOURS):
        """Initialize the aggregator.

        Args:
            base_hours_per_day: Billing threshold for extra hours (default 10)
        """
        self.base_hours_per_day = Decimal(base_hours_per_day)

    @log_function_call
    def aggregate(
        self, entries: Iterable[TripEntry], month: int, year: int
    ) -> AggregatedTripsheet:
        """Recompute entries and fold them into a summary.

        Args:
            entries: Raw entries of the tripsheet (not modified)
            month: Tripsheet month (1-12)
            year: Tripsheet year

        Returns:
            AggregatedTripsheet with new entries and their summary
        """
        entries = list(entries)

        with LogContext(month=month, year=year):
            logger.info(f"Aggregating {len(entries)} entries for {year}-{month:02d}")

            recalculated = [
                recalculate_entry(entry, self.base_hours_per_day) for entry in entries
            ]

            outside = [
                e for e in recalculated if (e.date.year, e.date.month) != (year, month)
            ]
            if outside:
                logger.warning(
                    f"{len(outside)} entries are dated outside {year}-{month:02d}: "
                    f"{', '.join(str(e.date) for e in outside)}"
                )

            recalculated.sort(key=lambda e: e.date)
            summary = summarize_entries(recalculated)

            logger.info(
                f"Summary: {summary.total_working_days} working, "
                f"{summary.total_off_days} off, {summary.total_pending_days} pending, "
                f"{summary.total_kms} km, {summary.total_hours} hours"
            )

        return AggregatedTripsheet(entries=recalculated, summary=summary)

    def aggregate_tripsheet(self, tripsheet: Tripsheet) -> Tripsheet:
        """Return a copy of a tripsheet with recomputed entries and summary.

        Call this every time a tripsheet is saved.

        Args:
            tripsheet: Tripsheet with raw entries

        Returns:
            New Tripsheet with derived entry fields and summary
        """
        with LogContext(vehicle_number=tripsheet.vehicle_number):
            data = self.aggregate(tripsheet.entries, tripsheet.month, tripsheet.year)

        return tripsheet.model_copy(
            update={"entries": data.entries, "summary": data.summary}
        )
