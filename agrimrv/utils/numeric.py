"""Numeric helpers shared by the scoring calculators"""

import math
from typing import Any


def finite_or_zero(value: Any) -> float:
    """Coerce a missing, non-numeric or non-finite value to 0.0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up.

    Matches the rounding the mobile client applied to every displayed score
    (2.5 -> 3, -2.5 -> -2), unlike Python's round() which rounds halves to even.
    """
    return int(math.floor(value + 0.5))
