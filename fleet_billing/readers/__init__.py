"""Readers for loading tripsheet files."""

from fleet_billing.readers.tripsheet_reader import TripsheetReadError, TripsheetReader

__all__ = ["TripsheetReader", "TripsheetReadError"]
