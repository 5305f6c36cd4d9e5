"""
rate_engine - hotel rate pricing core

Pure, synchronous pricing functions over the rate entity model:
- tiers: length-of-stay tier resolution
- adjustments: PERCENTAGE / FIXED / MULTIPLIER adjustments
- overrides: dated, room-type-scoped overrides
- packages: package component aggregation
- quote: nightly and stay quotes against a RateRepository

Usage:
    >>> from rate_engine import InMemoryRateRepository, quote_nightly_rate
"""
from rate_engine.adjustments import apply_adjustment, apply_tier
from rate_engine.errors import (
    ConfigurationError,
    InvalidQuoteRequest,
    NegativeRateWarning,
    PricingError,
    RatePlanNotFound,
    RatePlanUnavailable,
)
from rate_engine.models import (
    AdjustmentType,
    ComponentType,
    EntityStatus,
    GuestCounts,
    OverrideType,
    RateOverride,
    RatePackageComponent,
    RatePlan,
    RateTier,
)
from rate_engine.money import round_money
from rate_engine.overrides import apply_override, resolve_override
from rate_engine.packages import price_components
from rate_engine.quote import (
    NightlyQuote,
    StayQuote,
    price_night,
    quote_nightly_rate,
    quote_stay,
)
from rate_engine.repository import InMemoryRateRepository, RateRepository
from rate_engine.tiers import resolve_tier

__all__ = [
    "AdjustmentType", "ComponentType", "EntityStatus", "OverrideType",
    "RatePlan", "RateTier", "RateOverride", "RatePackageComponent", "GuestCounts",
    "PricingError", "ConfigurationError", "InvalidQuoteRequest",
    "RatePlanNotFound", "RatePlanUnavailable", "NegativeRateWarning",
    "resolve_tier", "apply_adjustment", "apply_tier",
    "resolve_override", "apply_override", "price_components",
    "price_night", "quote_nightly_rate", "quote_stay",
    "NightlyQuote", "StayQuote", "round_money",
    "RateRepository", "InMemoryRateRepository",
]
