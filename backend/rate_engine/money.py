"""
rate_engine/money.py

Decimal helpers. Amounts stay unrounded through every pricing stage and are
quantized once, half-up, when they leave the engine.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional

from rate_engine.errors import ConfigurationError

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """
    Coerce a number-like value to Decimal.

    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.

    Raises:
        ConfigurationError: If the value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be numeric, got {value!r}")
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ConfigurationError(f"{field_name} must be numeric, got {value!r}")


def to_optional_decimal(value: Any, field_name: str = "amount") -> Optional[Decimal]:
    if value is None:
        return None
    return to_decimal(value, field_name)


def round_money(amount: Decimal) -> Decimal:
    """Quantize to 2 decimal places using half-up rounding."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
