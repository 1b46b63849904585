"""Decimal helpers for monetary and percentage values."""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_money(value: Decimal) -> Decimal:
    """Round a Decimal to two places, half up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def progress_percentage(current_amount: Decimal, target_amount: Decimal) -> Decimal:
    """Return current/target as a percentage clamped to [0, 100].

    A non-positive target yields 0.
    """
    if target_amount <= 0:
        return ZERO
    return clamp(current_amount / target_amount * HUNDRED, ZERO, HUNDRED)
