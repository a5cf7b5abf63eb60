"""Indian number formatting and document serial numbers."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from fleet_billing.models.base import to_decimal

RUPEE_SYMBOL = "₹"

Number = Union[int, float, Decimal, str]

# Largest first
_COMPACT_UNITS = (
    (Decimal(10_000_000), "Cr"),
    (Decimal(100_000), "L"),
    (Decimal(1_000), "K"),
)


def _group_indian(digits: str) -> str:
    """Insert commas into a digit string: last three, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_indian_number(value: Number, decimals: int = 0) -> str:
    """Format a number with Indian digit grouping.

    Example:
        >>> format_indian_number(123456)
        '1,23,456'
        >>> format_indian_number(Decimal("12345678.5"), decimals=2)
        '1,23,45,678.50'
    """
    amount = to_decimal(value)
    exponent = Decimal(1).scaleb(-decimals)
    amount = amount.quantize(exponent, rounding=ROUND_HALF_UP)

    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):f}".partition(".")
    grouped = _group_indian(whole)
    if decimals > 0:
        return f"{sign}{grouped}.{fraction}"
    return f"{sign}{grouped}"


def format_indian_currency(value: Number, decimals: int = 2) -> str:
    """Format an amount as rupees, e.g. ``₹1,23,456.00``."""
    formatted = format_indian_number(value, decimals)
    if formatted.startswith("-"):
        return f"-{RUPEE_SYMBOL}{formatted[1:]}"
    return f"{RUPEE_SYMBOL}{formatted}"


def format_indian_compact(value: Number) -> str:
    """Format an amount in compact crore/lakh/thousand units.

    Example:
        >>> format_indian_compact(45000000)
        '4.50Cr'
        >>> format_indian_compact(123000)
        '1.23L'
        >>> format_indian_compact(2500)
        '2.50K'
        >>> format_indian_compact(950)
        '950'
    """
    amount = to_decimal(value)
    magnitude = abs(amount)

    for unit, suffix in _COMPACT_UNITS:
        if magnitude >= unit:
            scaled = (amount / unit).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
            return f"{scaled}{suffix}"

    return format_indian_number(amount)


def parse_indian_number(text: str) -> Decimal:
    """Parse an Indian-formatted number such as ``₹1,23,456.50``.

    Raises:
        ValueError: If the text is not a number after stripping the rupee
            symbol, commas and whitespace
    """
    cleaned = "".join(text.replace(RUPEE_SYMBOL, "").replace(",", "").split())
    if not cleaned:
        raise ValueError(f"Cannot parse number from {text!r}")
    try:
        return Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Cannot parse number from {text!r}") from e


def generate_serial_number(prefix: str, year: int, sequence: int) -> str:
    """Build a document number like ``TS-2025-0001``.

    Raises:
        ValueError: If the sequence is not positive
    """
    if sequence < 1:
        raise ValueError(f"Sequence must be positive, got {sequence}")
    return f"{prefix}-{year}-{sequence:04d}"
