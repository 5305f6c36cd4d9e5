"""
rate_engine/tiers.py

Tier resolver: picks the length-of-stay tier that applies to a stay.
"""
import logging
from typing import Iterable, List, Optional

from rate_engine.errors import InvalidQuoteRequest
from rate_engine.models import RateTier

logger = logging.getLogger(__name__)


def tier_sort_key(tier: RateTier):
    """Ascending priority, then ascending min_nights, then ascending id."""
    return (tier.priority, tier.min_nights, tier.id)


def order_tiers(tiers: Iterable[RateTier]) -> List[RateTier]:
    """Return the active tiers in evaluation order, validating each one."""
    active = []
    for tier in tiers:
        tier.validate()
        if tier.is_active:
            active.append(tier)
    return sorted(active, key=tier_sort_key)


def resolve_tier(tiers: Iterable[RateTier], nights: int) -> Optional[RateTier]:
    """
    Select the tier that applies to a stay of ``nights`` nights.

    Overlapping ranges are tolerated: the first match in evaluation order
    wins, independent of the order of the input.

    Args:
        tiers: Candidate tiers (may be empty).
        nights: Stay length, >= 1.

    Returns:
        The matching tier, or None when no tier covers the stay.

    Raises:
        InvalidQuoteRequest: If nights < 1.
        ConfigurationError: If any tier has a malformed night range.
    """
    if nights is None or nights < 1:
        raise InvalidQuoteRequest(f"nights must be >= 1, got {nights}")

    for tier in order_tiers(tiers):
        if tier.covers(nights):
            logger.debug("Tier %s selected for %s nights", tier.id, nights)
            return tier

    logger.debug("No tier covers %s nights", nights)
    return None


def find_overlaps(tiers: Iterable[RateTier]) -> List[tuple]:
    """
    List pairs of active tiers whose night ranges intersect.

    Overlap is legal but usually a data-entry mistake, so services report it.
    """
    ordered = order_tiers(tiers)
    overlaps = []
    for i, a in enumerate(ordered):
        for b in ordered[i + 1:]:
            a_max = a.max_nights if a.max_nights is not None else float("inf")
            b_max = b.max_nights if b.max_nights is not None else float("inf")
            if a.min_nights <= b_max and b.min_nights <= a_max:
                overlaps.append((a, b))
    return overlaps


__all__ = ["resolve_tier", "order_tiers", "tier_sort_key", "find_overlaps"]
