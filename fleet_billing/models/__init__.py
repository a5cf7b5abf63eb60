"""Data models for the fleet billing engine.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- TripEntry, TripsheetSummary, Tripsheet: Daily entries and monthly totals
- BillingRules, BillingCalculation: Vehicle rate table and invoice
- SalaryRules, SalaryCalculation: Driver salary rates and payslip
"""

from fleet_billing.models.base import BaseDataModel, to_decimal
from fleet_billing.models.billing import (
    BaseKmPolicy,
    BillingCalculation,
    BillingRules,
    RulesSource,
)
from fleet_billing.models.salary import SalaryCalculation, SalaryRules
from fleet_billing.models.tripsheet import (
    DayType,
    EntryStatus,
    TripEntry,
    Tripsheet,
    TripsheetSummary,
)

__all__ = [
    "BaseDataModel",
    "to_decimal",
    "BaseKmPolicy",
    "BillingCalculation",
    "BillingRules",
    "RulesSource",
    "SalaryCalculation",
    "SalaryRules",
    "DayType",
    "EntryStatus",
    "TripEntry",
    "Tripsheet",
    "TripsheetSummary",
]
