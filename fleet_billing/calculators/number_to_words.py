"""Indian-English amount-in-words renderer.

Amounts are grouped the Indian way: the last three digits form the
hundreds group, and every group above that has two digits (thousand,
lakh, crore), e.g. 1,23,45,678 is "One Crore Twenty Three Lakh Forty Five
Thousand Six Hundred Seventy Eight".

Invoices end their amount with "Only" and payslips with "Rupees Only";
both endings are passed in by the caller and reproduced verbatim.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from fleet_billing.models.base import to_decimal

ONLY = "Only"
RUPEES_ONLY = "Rupees Only"

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000
HUNDRED = 100

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]

TEENS = [
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
]

TENS = [
    "",
    "",
    "Twenty",
    "Thirty",
    "Forty",
    "Fifty",
    "Sixty",
    "Seventy",
    "Eighty",
    "Ninety",
]


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def _convert_below_hundred(n: int) -> str:
    if n < 10:
        return ONES[n]
    if n < 20:
        return TEENS[n - 10]
    return _join(TENS[n // 10], ONES[n % 10])


def _convert_below_thousand(n: int) -> str:
    if n < HUNDRED:
        return _convert_below_hundred(n)
    return _join(
        f"{ONES[n // HUNDRED]} Hundred", _convert_below_hundred(n % HUNDRED)
    )


def _convert_indian(n: int) -> str:
    """Render a whole number, peeling off crore, lakh and thousand groups."""
    if n == 0:
        return ""
    if n >= CRORE:
        # Crores are not grouped further, so large counts recurse
        return _join(
            f"{_convert_indian(n // CRORE)} Crore", _convert_indian(n % CRORE)
        )
    if n >= LAKH:
        return _join(
            f"{_convert_below_hundred(n // LAKH)} Lakh", _convert_indian(n % LAKH)
        )
    if n >= THOUSAND:
        return _join(
            f"{_convert_below_hundred(n // THOUSAND)} Thousand",
            _convert_below_thousand(n % THOUSAND),
        )
    return _convert_below_thousand(n)


def number_to_indian_words(
    amount: Union[int, float, Decimal],
    suffix: str = ONLY,
    include_paisa: bool = False,
) -> str:
    """Convert a non-negative amount to Indian-English words.

    The fractional part is dropped unless ``include_paisa`` is set, in which
    case it is rendered as "and N Paisa" just before the final "Only".

    Args:
        amount: Amount in rupees
        suffix: Ending to append, ``ONLY`` or ``RUPEES_ONLY``
        include_paisa: Render the fractional part as paisa

    Returns:
        The amount in words

    Raises:
        ValueError: If the amount is negative

    Example:
        >>> number_to_indian_words(0)
        'Zero Only'
        >>> number_to_indian_words(100000)
        'One Lakh Only'
        >>> number_to_indian_words(23207, suffix=RUPEES_ONLY)
        'Twenty Three Thousand Two Hundred Seven Rupees Only'
        >>> number_to_indian_words(Decimal("1500.50"), RUPEES_ONLY, include_paisa=True)
        'One Thousand Five Hundred Rupees and Fifty Paisa Only'
    """
    value = to_decimal(amount)
    if value < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")

    rupees = int(value)
    paisa = 0
    if include_paisa:
        fraction = (value - rupees) * 100
        paisa = int(fraction.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        if paisa == 100:
            rupees += 1
            paisa = 0

    words = _convert_indian(rupees) or "Zero"

    if paisa > 0:
        head, _, tail = suffix.rpartition(" ")
        return _join(words, head, f"and {_convert_below_hundred(paisa)} Paisa", tail)

    return f"{words} {suffix}"
