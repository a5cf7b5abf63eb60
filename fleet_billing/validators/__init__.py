"""Validation layer for tripsheet data quality."""

from fleet_billing.validators.tripsheet_validator import TripsheetValidator
from fleet_billing.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "TripsheetValidator",
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
]
