"""Tripsheet data models for the fleet billing engine.

This module defines the TripEntry model (one calendar day of one vehicle),
the TripsheetSummary produced by aggregation, and the Tripsheet that owns
both for a single vehicle and month.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Optional, Union

from pydantic import Field, field_validator, model_validator

from fleet_billing.models.base import BaseDataModel, to_decimal

# "H:mm" or "HH:mm", 00:00 through 23:59
CLOCK_TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"


class DayType(str, Enum):
    """Calendar classification of a day."""

    WORKING = "working"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class EntryStatus(str, Enum):
    """What actually happened on a day, as reported by the driver."""

    WORKING = "working"
    OFF = "off"
    PENDING = "pending"


class TripEntry(BaseDataModel):
    """Represents one calendar day's record for one vehicle.

    Raw fields are supplied by the driver. Derived fields (``total_km``,
    ``total_hours``, ``extra_hours``, ``driver_extra_hours``) are always
    recomputed by the tripsheet aggregator and never trusted as input.

    Attributes:
        date: Calendar date of the entry
        day_of_week: English day name (derived when unset)
        day_type: working, saturday or sunday (derived when unset)
        status: working, off or pending
        starting_km: Odometer reading at start of day
        closing_km: Odometer reading at end of day
        total_km: closing_km - starting_km (derived)
        starting_time: Start clock time "HH:mm"
        closing_time: Closing clock time "HH:mm"
        total_hours: Elapsed hours, one decimal (derived)
        extra_hours: Hours above the billing threshold (derived)
        driver_extra_hours: Hours above the driver threshold (derived)
        fuel_litres: Fuel filled in litres
        fuel_amount: Fuel cost
        from_location: Trip origin
        to_location: Trip destination
        remarks: Free text

    Example:
        >>> entry = TripEntry(
        ...     date=dt.date(2025, 9, 1),
        ...     status=EntryStatus.WORKING,
        ...     starting_km=1200,
        ...     closing_km=1310,
        ...     starting_time="08:00",
        ...     closing_time="19:30",
        ... )
        >>> entry.closing_km - entry.starting_km
        110
    """

    date: dt.date = Field(..., description="Calendar date of the entry")
    day_of_week: Optional[str] = Field(None, description="English day name")
    day_type: Optional[DayType] = Field(None, description="Calendar day type")
    status: EntryStatus = Field(EntryStatus.PENDING, description="Entry status")

    starting_km: Optional[int] = Field(None, ge=0, description="Starting odometer")
    closing_km: Optional[int] = Field(None, ge=0, description="Closing odometer")
    total_km: Optional[int] = Field(None, ge=0, description="Kilometers driven")

    starting_time: Optional[str] = Field(
        None, pattern=CLOCK_TIME_PATTERN, description="Start time (HH:mm)"
    )
    closing_time: Optional[str] = Field(
        None, pattern=CLOCK_TIME_PATTERN, description="Closing time (HH:mm)"
    )
    total_hours: Optional[Decimal] = Field(None, ge=0, description="Hours worked")
    extra_hours: Optional[Decimal] = Field(None, ge=0, description="Billing extra")
    driver_extra_hours: Optional[Decimal] = Field(
        None, ge=0, description="Driver overtime hours"
    )

    fuel_litres: Optional[Decimal] = Field(None, ge=0, description="Fuel litres")
    fuel_amount: Optional[Decimal] = Field(None, ge=0, description="Fuel cost")

    from_location: Optional[str] = Field(None, description="Trip origin")
    to_location: Optional[str] = Field(None, description="Trip destination")
    remarks: Optional[str] = Field(None, description="Free text remarks")

    @field_validator("starting_km", "closing_km", "total_km", mode="before")
    @classmethod
    def round_km(cls, v: Union[None, str, int, float, Decimal]) -> Optional[int]:
        """Round odometer readings half-up to whole kilometers.

        Args:
            v: The value to round

        Returns:
            The value as an int, or None when absent
        """
        if v is None or v == "":
            return None
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        return int(to_decimal(v).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @field_validator(
        "total_hours",
        "extra_hours",
        "driver_extra_hours",
        "fuel_litres",
        "fuel_amount",
        mode="before",
    )
    @classmethod
    def convert_to_decimal(
        cls, v: Union[None, str, int, float, Decimal]
    ) -> Optional[Decimal]:
        """Convert numeric values to Decimal for precision."""
        if v is None or v == "":
            return None
        return to_decimal(v)

    @field_validator("from_location", "to_location", "remarks")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        """Trim surrounding whitespace from free-text fields."""
        if v is None:
            return None
        return v.strip()

    @model_validator(mode="after")
    def validate_odometer(self) -> "TripEntry":
        """Validate that the closing reading is not below the starting reading.

        Returns:
            The validated model instance

        Raises:
            ValueError: If closing_km is less than starting_km
        """
        if (
            self.starting_km is not None
            and self.closing_km is not None
            and self.closing_km < self.starting_km
        ):
            raise ValueError(
                f"closing_km ({self.closing_km}) must be greater than or equal "
                f"to starting_km ({self.starting_km})"
            )
        return self


class TripsheetSummary(BaseDataModel):
    """Month-level totals over one vehicle's trip entries.

    Day counts bucket every entry by ``status``. Kilometer and hour totals
    only include entries whose status is ``working``; fuel totals include
    every entry.
    """

    total_working_days: int = Field(0, ge=0)
    total_off_days: int = Field(0, ge=0)
    total_pending_days: int = Field(0, ge=0)
    total_kms: int = Field(0, ge=0)
    total_hours: Decimal = Field(Decimal("0"), ge=0)
    total_extra_hours: Decimal = Field(Decimal("0"), ge=0)
    total_driver_extra_hours: Decimal = Field(Decimal("0"), ge=0)
    total_fuel_litres: Decimal = Field(Decimal("0"), ge=0)
    total_fuel_amount: Decimal = Field(Decimal("0"), ge=0)

    @field_validator(
        "total_hours",
        "total_extra_hours",
        "total_driver_extra_hours",
        "total_fuel_litres",
        "total_fuel_amount",
        mode="before",
    )
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert numeric values to Decimal for precision."""
        return to_decimal(v)


class Tripsheet(BaseDataModel):
    """One vehicle's trip entries for one month.

    Attributes:
        month: Month number (1-12)
        year: Calendar year
        tripsheet_number: Serial such as "TS-2025-0001"
        vehicle_number: Registration number of the vehicle
        driver_name: Name of the assigned driver
        entries: Daily trip entries
        summary: Aggregated totals (recomputed on every aggregation pass)
    """

    month: int = Field(..., ge=1, le=12, description="Month number")
    year: int = Field(..., ge=2000, description="Calendar year")
    tripsheet_number: Optional[str] = Field(None, description="Tripsheet serial")
    vehicle_number: Optional[str] = Field(None, description="Vehicle number")
    driver_name: Optional[str] = Field(None, description="Driver name")
    entries: List[TripEntry] = Field(default_factory=list)
    summary: TripsheetSummary = Field(default_factory=TripsheetSummary)
