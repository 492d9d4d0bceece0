"""Numeric rounding and display helpers shared by scoring and exports.

Pure functions with no external dependencies.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int) -> float:
    """Round to ``places`` decimals, ties away from zero.

    Works on the exact binary value of ``value`` (Decimal(float) is exact),
    so 1.005 stays 1.0 because it is really 1.00499999...; only true ties
    such as 0.125 round up.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: float | int) -> str:
    """Shortest display form: 7.0 -> "7", 7.5 -> "7.5", 16 -> "16"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clamp_score(value: float, low: float = 0.0, high: float = 10.0) -> float:
    """Clamp a self-rated score into [low, high]."""
    return max(low, min(high, value))
