"""Numeric coercion, rounding and display formatting.

Every renderer (CLI tables, MCP payloads, exported reports) goes through
these helpers so that on-screen and exported figures agree.
"""

import math
from typing import Any


def safe_parse(value: Any) -> float:
    """Leniently coerce a user-entered value to a float.

    Missing, empty, non-numeric, NaN and infinite inputs all become 0.0.
    Thousands separators and surrounding whitespace in strings are ignored.

    Example:
        safe_parse("20,000")  # -> 20000.0
        safe_parse("abc")     # -> 0.0
        safe_parse(None)      # -> 0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def round_currency(amount: float) -> int:
    """Round to the nearest whole currency unit, halves rounding up.

    Python's round() uses banker's rounding (round(2.5) == 2), which would
    drift from spreadsheet-style figures, so halves always go up here.
    """
    return int(math.floor(safe_parse(amount) + 0.5))


def round_to_step(amount: float, step: int = 100) -> int:
    """Round to the nearest multiple of step (e.g. 16,672 -> 16,700)."""
    if step <= 0:
        return round_currency(amount)
    return round_currency(safe_parse(amount) / step) * step


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def format_currency(amount: float, symbol: str = "¥") -> str:
    """Format as whole currency units: 232096 -> '¥232,096'."""
    value = round_currency(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,}"


def format_percent(value: float, precision: int = 0) -> str:
    """Format a ratio as a percentage: 0.6113 -> '61%' (precision=0) or '61.1%'."""
    value = safe_parse(value)
    if not value:
        return "0%"
    return f"{value * 100:.{precision}f}%"


def format_delta(amount: float, symbol: str = "¥") -> str:
    """Format a signed difference: +¥1,000 / -¥500, '-' when zero."""
    value = safe_parse(amount)
    if not value:
        return "-"
    sign = "+" if value > 0 else ""
    return f"{sign}{format_currency(value, symbol)}"
