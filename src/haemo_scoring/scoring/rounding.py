"""Numeric helpers shared by the scorers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_ONE_DECIMAL = Decimal("0.1")


def round_one_decimal(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Rounds the exact binary value of ``value`` (not its shortest repr), so
    1.25 becomes 1.3 while 1.45, stored as 1.4499999..., becomes 1.4. This
    matches how the scores were historically displayed.

    Args:
        value: Value to round.

    Returns:
        The rounded value.
    """
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp a value into ``[lower, upper]``."""
    return max(lower, min(upper, value))
