"""Base model for all data models in the fleet billing engine.

This module provides a base Pydantic model with common configuration
and shared helpers for coercing numeric input into Decimal and rounding
rupee amounts.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking
    - Serialization to/from dictionaries
    - Rejection of unknown fields
    - Arbitrary types support for dates and decimals

    Example:
        >>> class Vehicle(BaseDataModel):
        ...     number: str
        ...     odometer: int
        >>> vehicle = Vehicle(number="TN 11U 0474", odometer=1200)
        >>> vehicle.model_dump()
        {'number': 'TN 11U 0474', 'odometer': 1200}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal and date
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        # Unknown fields are rejected rather than silently dropped
        extra="forbid",
        frozen=False,
    )


def to_decimal(value: Union[str, int, float, Decimal]) -> Decimal:
    """Convert a numeric value to Decimal without binary float artefacts.

    Args:
        value: The value to convert

    Returns:
        The value as a Decimal

    Raises:
        ValueError: If the value cannot be converted to Decimal

    Example:
        >>> to_decimal(0.1)
        Decimal('0.1')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Cannot convert {value!r} to Decimal: {e}")


def round_money(value: Decimal) -> Decimal:
    """Round a rupee amount to paisa, halves rounding up.

    Example:
        >>> round_money(Decimal("1.005"))
        Decimal('1.01')
    """
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
