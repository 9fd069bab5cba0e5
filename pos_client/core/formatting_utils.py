"""
Money and URL formatting helpers.

This module provides utilities for:
- Rounding money to two decimals (half-up)
- Two-decimal currency display
- Rendering query-string and path values the way the backend expects them
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union
from urllib.parse import quote

Number = Union[int, float, Decimal, str]

CENT = Decimal("0.01")

# Characters encodeURIComponent leaves alone besides the RFC 3986 unreserved set
URI_COMPONENT_SAFE = "!'()*"


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal without binary float noise.

    Examples:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal(5)
        Decimal('5')
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    """
    Round to two decimal places, halves away from zero.

    Examples:
        >>> round_money("125")
        Decimal('125.00')
        >>> round_money(2.675)
        Decimal('2.68')
    """
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value: Number, symbol: str = "$") -> str:
    """
    Format a money amount for display with thousands separators.

    Examples:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(-3, symbol="")
        '-3.00'
    """
    amount = round_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def query_value(value) -> str:
    """
    Render a value for a query string.

    Integral floats are written without a fractional part so that 10.0 is
    sent as "10", the same as the web client does.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return str(value)


def encode_path_segment(value: str) -> str:
    """
    Percent-encode a single path segment like JavaScript's encodeURIComponent.

    Examples:
        >>> encode_path_segment("Phones & Tablets")
        'Phones%20%26%20Tablets'
    """
    return quote(str(value), safe=URI_COMPONENT_SAFE)
