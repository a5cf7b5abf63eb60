"""Aggregators for folding trip entries into monthly totals."""

from fleet_billing.aggregators.tripsheet_aggregator import (
    AggregatedTripsheet,
    TripsheetAggregator,
    recalculate_entry,
    summarize_entries,
)

__all__ = [
    "AggregatedTripsheet",
    "TripsheetAggregator",
    "recalculate_entry",
    "summarize_entries",
]
