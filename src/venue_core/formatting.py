"""Indian-numbering display helpers.

The marts return plain numbers; pages format them with these functions.
Magnitudes use the Indian convention: K (thousand), L (lakh, 1,00,000) and
Cr (crore, 1,00,00,000), and full amounts use 2-digit grouping after the
first thousand (12,34,567).
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

RUPEE = "₹"

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, (bool, str)):
        return None
    if not isinstance(value, (int, float)):
        # numpy scalars expose __float__
        try:
            value = float(value)
        except (TypeError, ValueError):
            return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def _fixed(value: float, places: int) -> str:
    """Round half-up to a fixed number of decimal places."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _scaled(value: float, symbol: str) -> str:
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if magnitude >= CRORE:
        return f"{sign}{symbol}{_fixed(magnitude / CRORE, 2)}Cr"
    if magnitude >= LAKH:
        return f"{sign}{symbol}{_fixed(magnitude / LAKH, 2)}L"
    if magnitude >= THOUSAND:
        return f"{sign}{symbol}{_fixed(magnitude / THOUSAND, 0)}K"
    return f"{sign}{symbol}{_fixed(magnitude, 0)}"


def format_indian_number(value: Any) -> str:
    """Format a rupee amount with K/L/Cr suffixes.

    Examples:
        >>> format_indian_number(15_000_000)
        '₹1.50Cr'
        >>> format_indian_number(250_000)
        '₹2.50L'
        >>> format_indian_number(4_500)
        '₹5K'
        >>> format_indian_number(-999)
        '-₹999'
        >>> format_indian_number(None)
        '₹0'
    """
    number = _as_number(value)
    if number is None:
        return f"{RUPEE}0"
    return _scaled(number, RUPEE)


def format_number(value: Any) -> str:
    """Same scaling as ``format_indian_number`` without the currency symbol."""
    number = _as_number(value)
    if number is None:
        return "0"
    return _scaled(number, "")


def group_indian_digits(digits: str) -> str:
    """Insert Indian-style separators into a string of digits.

    Examples:
        >>> group_indian_digits("1234567")
        '12,34,567'
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(value: Any) -> str:
    """Format a full rupee amount with Indian digit grouping.

    Up to two decimals are kept; trailing zeros are dropped.

    Examples:
        >>> format_currency(1234567)
        '₹12,34,567'
        >>> format_currency(1500.5)
        '₹1,500.5'
    """
    number = _as_number(value)
    if number is None:
        return f"{RUPEE}0"
    sign = "-" if number < 0 else ""
    whole, _, frac = _fixed(abs(number), 2).partition(".")
    frac = frac.rstrip("0")
    body = group_indian_digits(whole) + (f".{frac}" if frac else "")
    return f"{sign}{RUPEE}{body}"
