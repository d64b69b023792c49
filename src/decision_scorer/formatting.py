"""Value formatting and numeric helpers shared by the scoring components."""

import math
from typing import Any, Optional


def round_half_up(value: float, decimals: int = 2) -> float:
    """Round to the given decimals with halves rounded up rather than to even."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a number between low and high."""
    return min(max(value, low), high)


def is_number(value: Any) -> bool:
    """True for int/float values that are not booleans and not NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def coerce_number(value: Any) -> Optional[float]:
    """Coerce a feature value to a float, or None when it is not numeric.

    Booleans count as 0/1 and numeric strings are parsed.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        return None if math.isnan(parsed) else parsed
    return None


def plain_text(value: Any) -> str:
    """Render a value as plain text.

    Integral floats drop their fractional part and booleans render as
    ``true``/``false``, so text reads the same as the JSON input.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(plain_text(item) for item in value)
    return str(value)


# Substring rules checked in order against the lower-cased criterion name
_CURRENCY_KEYS = ("cost", "price")
_PERCENT_KEYS = ("percent", "reliability", "uptime")
_THROUGHPUT_KEYS = ("performance", "iops")


def format_display_value(value: Any, criteria: str) -> str:
    """Format a feature value for explanation text.

    The criterion name picks the style (first match wins):
    cost/price -> ``$0.115``; percent/reliability/uptime -> ``99.95%``;
    performance/iops -> ``3,000``. Other numbers use 3 decimals below 1,
    1 decimal below 100 and a rounded integer with separators above.
    Non-numeric values render as plain text.
    """
    if not is_number(value):
        return plain_text(value)

    name = criteria.lower()
    if any(key in name for key in _CURRENCY_KEYS):
        return f"${value:.3f}"
    if any(key in name for key in _PERCENT_KEYS):
        return f"{plain_text(value)}%"
    if any(key in name for key in _THROUGHPUT_KEYS):
        return f"{round_half_up(value, 0):,.0f}"
    if value < 1:
        return f"{value:.3f}"
    if value < 100:
        return f"{value:.1f}"
    return f"{round_half_up(value, 0):,.0f}"


def format_score(value: float) -> str:
    """Render a rounded score without a trailing ``.0``."""
    return plain_text(round_half_up(value, 2))
