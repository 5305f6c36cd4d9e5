"""
rate_engine/adjustments.py

Adjustment calculator: transforms a base rate by a tier adjustment.
"""
from decimal import Decimal

from rate_engine.models import AdjustmentType, coerce_enum
from rate_engine.money import HUNDRED, to_decimal


def apply_adjustment(base_rate, adjustment_type, value) -> Decimal:
    """
    Apply a tier adjustment to a base rate.

    No rounding happens here; callers round once at the quote boundary.

    Args:
        base_rate: Nightly base rate.
        adjustment_type: AdjustmentType (or its string value).
        value: Signed adjustment value.

    Returns:
        The adjusted, unrounded rate. May be negative for large FIXED
        discounts; the caller decides what to do with that.

    Raises:
        ConfigurationError: Unknown adjustment type or non-numeric input.
    """
    base = to_decimal(base_rate, "base_rate")
    amount = to_decimal(value, "adjustment_value")
    kind = coerce_enum(AdjustmentType, adjustment_type, "adjustment_type")

    if kind == AdjustmentType.PERCENTAGE:
        return base * (1 + amount / HUNDRED)
    if kind == AdjustmentType.FIXED:
        return base + amount
    # MULTIPLIER
    return base * amount


def apply_tier(base_rate, tier) -> Decimal:
    """Apply ``tier`` to ``base_rate``; a missing tier leaves the rate unchanged."""
    if tier is None:
        return to_decimal(base_rate, "base_rate")
    return apply_adjustment(base_rate, tier.adjustment_type, tier.adjustment_value)


__all__ = ["apply_adjustment", "apply_tier"]
