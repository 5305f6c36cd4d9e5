"""
rate_engine/errors.py

Pricing engine exceptions and result warnings.
"""
from dataclasses import dataclass
from decimal import Decimal


class PricingError(Exception):
    """Base class for every error raised by the pricing engine."""


class ConfigurationError(PricingError):
    """
    Invalid rate configuration (tier, override or package component).

    Raised synchronously; these are data errors that should have been
    rejected at data-entry time, not recoverable conditions.
    """


class InvalidQuoteRequest(PricingError, ValueError):
    """Bad caller input, e.g. nights < 1 or check-out not after check-in."""


class RatePlanNotFound(PricingError, LookupError):
    """The requested rate plan does not exist."""

    def __init__(self, rate_plan_id: int):
        super().__init__(f"Rate plan {rate_plan_id} not found")
        self.rate_plan_id = rate_plan_id


class RatePlanUnavailable(PricingError):
    """The rate plan exists but is not sellable (not ACTIVE)."""

    def __init__(self, rate_plan_id: int, status: str):
        super().__init__(f"Rate plan {rate_plan_id} is not sellable (status {status})")
        self.rate_plan_id = rate_plan_id
        self.status = status


@dataclass(frozen=True)
class NegativeRateWarning:
    """
    Flag attached to a quote whose computed rate went below zero.

    The engine never clamps; the caller decides the policy.

    Attributes:
        stage: Pricing stage that produced the negative amount
            ("tier", "override" or "total").
        amount: The unrounded negative amount.
    """

    stage: str
    amount: Decimal

    def to_dict(self) -> dict:
        return {
            "code": "NEGATIVE_RATE",
            "stage": self.stage,
            "amount": str(self.amount),
        }
