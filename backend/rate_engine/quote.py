"""
rate_engine/quote.py

Quote orchestration.

Pipeline for one night:
    base rate -> tier adjustment -> dated override (final word) -> + package extras

All stages work on unrounded Decimals; money leaves this module rounded
half-up to 2 decimal places.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from rate_engine.adjustments import apply_tier
from rate_engine.errors import (
    InvalidQuoteRequest, NegativeRateWarning, RatePlanNotFound, RatePlanUnavailable,
)
from rate_engine.models import (
    GuestCounts, RateOverride, RatePackageComponent, RatePlan, RateTier,
)
from rate_engine.money import ZERO, round_money, to_decimal
from rate_engine.overrides import apply_override, resolve_override
from rate_engine.packages import price_components
from rate_engine.repository import RateRepository
from rate_engine.tiers import resolve_tier

logger = logging.getLogger(__name__)


@dataclass
class NightlyQuote:
    """
    Price of one night.

    ``final_rate`` is the room rate after tier and override; ``nightly_total``
    adds the package extras to it.
    """

    date: date
    nights: int
    base_rate: Decimal
    tier_adjusted_rate: Decimal
    final_rate: Decimal
    extras_total: Decimal
    included_value: Decimal
    nightly_total: Decimal
    rate_plan_id: Optional[int] = None
    room_type_id: Optional[int] = None
    currency: Optional[str] = None
    applied_tier_id: Optional[int] = None
    applied_override_id: Optional[int] = None
    component_breakdown: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[NegativeRateWarning] = field(default_factory=list)
    # unrounded amounts, used when summing a stay
    raw_final_rate: Decimal = field(default=ZERO, repr=False, compare=False)
    raw_extras_total: Decimal = field(default=ZERO, repr=False, compare=False)

    @property
    def has_negative_rate(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rate_plan_id": self.rate_plan_id,
            "room_type_id": self.room_type_id,
            "date": self.date.isoformat(),
            "nights": self.nights,
            "currency": self.currency,
            "base_rate": self.base_rate,
            "tier_adjusted_rate": self.tier_adjusted_rate,
            "final_rate": self.final_rate,
            "extras_total": self.extras_total,
            "included_value": self.included_value,
            "nightly_total": self.nightly_total,
            "applied_tier_id": self.applied_tier_id,
            "applied_override_id": self.applied_override_id,
            "component_breakdown": list(self.component_breakdown),
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass
class StayQuote:
    """Price of a whole stay: one NightlyQuote per night."""

    rate_plan_id: int
    room_type_id: Optional[int]
    check_in: date
    check_out: date
    nights: int
    currency: Optional[str]
    room_total: Decimal
    extras_total: Decimal
    total: Decimal
    nightly: List[NightlyQuote] = field(default_factory=list)
    warnings: List[NegativeRateWarning] = field(default_factory=list)

    @property
    def has_negative_rate(self) -> bool:
        return bool(self.warnings)


def _breakdown(lines) -> List[Dict[str, Any]]:
    return [
        {
            "component_id": line.component_id,
            "component_type": line.component_type.value,
            "component_name": line.component_name,
            "quantity": line.quantity,
            "unit_price": round_money(line.unit_price),
            "line_total": round_money(line.line_total),
            "is_included": line.is_included,
            "charged": round_money(line.charged),
        }
        for line in lines
    ]


def price_night(
    base_rate,
    tiers: Iterable[RateTier],
    overrides: Iterable[RateOverride],
    components: Iterable[RatePackageComponent],
    room_type_id: Optional[int],
    on_date: date,
    nights: int,
    guest_counts: Optional[GuestCounts] = None,
) -> NightlyQuote:
    """
    Price a single night from explicit configuration.

    Pure: nothing is fetched and nothing passed in is modified.

    Args:
        base_rate: Nightly base rate.
        tiers: Tiers of the rate plan.
        overrides: Overrides of the rate plan.
        components: Package components of the rate plan.
        room_type_id: Room type being quoted.
        on_date: The night being priced.
        nights: Total stay length, used for tier selection.
        guest_counts: Guests per age band; defaults to one adult.

    Returns:
        NightlyQuote with rounded money fields.

    Raises:
        InvalidQuoteRequest: nights < 1 or negative guest counts.
        ConfigurationError: Malformed tier, override or component.
    """
    guests = guest_counts or GuestCounts()
    base = to_decimal(base_rate, "base_rate")

    tier = resolve_tier(list(tiers), nights)
    tier_adjusted = apply_tier(base, tier)

    override = resolve_override(list(overrides), room_type_id, on_date)
    final = apply_override(base, override) if override is not None else tier_adjusted

    package = price_components(list(components), guests)
    total = final + package.extras_total

    warnings = []
    if final < 0:
        stage = "override" if override is not None else "tier"
        warnings.append(NegativeRateWarning(stage=stage, amount=final))
        logger.warning("Negative %s rate %s on %s", stage, final, on_date)
    elif total < 0:
        warnings.append(NegativeRateWarning(stage="total", amount=total))
        logger.warning("Negative nightly total %s on %s", total, on_date)

    return NightlyQuote(
        date=on_date,
        nights=nights,
        room_type_id=room_type_id,
        base_rate=round_money(base),
        tier_adjusted_rate=round_money(tier_adjusted),
        final_rate=round_money(final),
        extras_total=round_money(package.extras_total),
        included_value=round_money(package.included_value),
        nightly_total=round_money(total),
        applied_tier_id=tier.id if tier is not None else None,
        applied_override_id=override.id if override is not None else None,
        component_breakdown=_breakdown(package.lines),
        warnings=warnings,
        raw_final_rate=final,
        raw_extras_total=package.extras_total,
    )


def _load_plan(repository: RateRepository, rate_plan_id: int) -> RatePlan:
    plan = repository.get_rate_plan(rate_plan_id)
    if plan is None:
        raise RatePlanNotFound(rate_plan_id)
    if not plan.is_active:
        raise RatePlanUnavailable(rate_plan_id, plan.status.value)
    return plan


def quote_nightly_rate(
    repository: RateRepository,
    rate_plan_id: int,
    room_type_id: Optional[int],
    on_date: date,
    nights: int,
    guest_counts: Optional[GuestCounts] = None,
) -> NightlyQuote:
    """
    Quote one night of a stay against stored configuration.

    Raises:
        RatePlanNotFound: Unknown rate plan.
        RatePlanUnavailable: Rate plan is not ACTIVE.
        InvalidQuoteRequest: nights < 1 or negative guest counts.
        ConfigurationError: Malformed stored configuration.
    """
    if nights is None or nights < 1:
        raise InvalidQuoteRequest(f"nights must be >= 1, got {nights}")
    plan = _load_plan(repository, rate_plan_id)

    quote = price_night(
        base_rate=repository.get_base_rate(rate_plan_id, room_type_id, on_date),
        tiers=repository.list_tiers(rate_plan_id),
        overrides=repository.list_overrides(rate_plan_id, room_type_id, on_date),
        components=repository.list_components(rate_plan_id),
        room_type_id=room_type_id,
        on_date=on_date,
        nights=nights,
        guest_counts=guest_counts,
    )
    quote.rate_plan_id = plan.id
    quote.currency = plan.currency
    return quote


def stay_dates(check_in: date, check_out: date) -> List[date]:
    """Nights of a stay: every date in [check_in, check_out)."""
    if check_out <= check_in:
        raise InvalidQuoteRequest("check_out must be after check_in")
    return [check_in + timedelta(days=i) for i in range((check_out - check_in).days)]


def quote_stay(
    repository: RateRepository,
    rate_plan_id: int,
    room_type_id: Optional[int],
    check_in: date,
    check_out: date,
    guest_counts: Optional[GuestCounts] = None,
) -> StayQuote:
    """
    Quote every night of a stay.

    The tier is chosen by the total stay length; overrides and base rates are
    resolved per night. Totals are summed unrounded and rounded once.
    """
    dates = stay_dates(check_in, check_out)
    nights = len(dates)
    plan = _load_plan(repository, rate_plan_id)

    tiers = repository.list_tiers(rate_plan_id)
    overrides = repository.list_overrides(rate_plan_id, room_type_id)
    components = repository.list_components(rate_plan_id)

    nightly = []
    room_total = ZERO
    extras_total = ZERO
    warnings = []
    for night in dates:
        quote = price_night(
            base_rate=repository.get_base_rate(rate_plan_id, room_type_id, night),
            tiers=tiers,
            overrides=overrides,
            components=components,
            room_type_id=room_type_id,
            on_date=night,
            nights=nights,
            guest_counts=guest_counts,
        )
        quote.rate_plan_id = plan.id
        quote.currency = plan.currency
        nightly.append(quote)
        room_total += quote.raw_final_rate
        extras_total += quote.raw_extras_total
        warnings.extend(quote.warnings)

    return StayQuote(
        rate_plan_id=plan.id,
        room_type_id=room_type_id,
        check_in=check_in,
        check_out=check_out,
        nights=nights,
        currency=plan.currency,
        room_total=round_money(room_total),
        extras_total=round_money(extras_total),
        total=round_money(room_total + extras_total),
        nightly=nightly,
        warnings=warnings,
    )


__all__ = [
    "NightlyQuote", "StayQuote", "price_night",
    "quote_nightly_rate", "quote_stay", "stay_dates",
]
