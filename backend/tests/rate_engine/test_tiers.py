"""
Tier resolver tests
"""
import pytest
from decimal import Decimal

from rate_engine.errors import ConfigurationError, InvalidQuoteRequest
from rate_engine.models import AdjustmentType, EntityStatus, RateTier
from rate_engine.tiers import find_overlaps, order_tiers, resolve_tier


def _tier(id, min_nights, max_nights=None, priority=0, value="-10",
          kind=AdjustmentType.PERCENTAGE, status=EntityStatus.ACTIVE):
    return RateTier(
        id=id, rate_plan_id=1, min_nights=min_nights, max_nights=max_nights,
        adjustment_type=kind, adjustment_value=Decimal(value), priority=priority, status=status,
    )


class TestResolveTier:

    def test_no_tiers(self):
        assert resolve_tier([], 3) is None

    def test_range_contains_nights(self):
        tier = _tier(1, 3, 6)
        assert resolve_tier([tier], 4) is tier

    def test_bounds_are_inclusive(self):
        tier = _tier(1, 3, 6)
        assert resolve_tier([tier], 3) is tier
        assert resolve_tier([tier], 6) is tier

    def test_outside_range(self):
        tier = _tier(1, 3, 6)
        assert resolve_tier([tier], 2) is None
        assert resolve_tier([tier], 7) is None

    def test_unbounded_max(self):
        tier = _tier(1, 7)
        assert resolve_tier([tier], 365) is tier

    def test_never_returns_tier_excluding_nights(self):
        tiers = [_tier(1, 1, 2), _tier(2, 3, 6), _tier(3, 10)]
        for nights in range(1, 15):
            tier = resolve_tier(tiers, nights)
            if tier is not None:
                assert tier.covers(nights)
            else:
                assert nights in (7, 8, 9)

    def test_overlap_lower_priority_wins_regardless_of_order(self):
        first = _tier(10, 3, 6, priority=1)
        second = _tier(11, 4, 8, priority=2)
        assert resolve_tier([first, second], 5) is first
        assert resolve_tier([second, first], 5) is first

    def test_equal_priority_falls_back_to_min_nights_then_id(self):
        a = _tier(5, 2, 10)
        b = _tier(4, 3, 10)
        c = _tier(3, 2, 10)
        assert resolve_tier([a, b, c], 5) is c

    def test_inactive_tiers_ignored(self):
        inactive = _tier(1, 1, priority=0, status=EntityStatus.INACTIVE)
        active = _tier(2, 1, priority=5)
        assert resolve_tier([inactive, active], 2) is active

    def test_nights_below_one_rejected(self):
        with pytest.raises(InvalidQuoteRequest):
            resolve_tier([_tier(1, 1)], 0)

    def test_min_nights_below_one_rejected(self):
        with pytest.raises(ConfigurationError):
            resolve_tier([_tier(1, 0)], 1)

    def test_max_below_min_rejected(self):
        with pytest.raises(ConfigurationError):
            resolve_tier([_tier(1, 5, 3)], 4)


class TestOrderAndOverlaps:

    def test_order(self):
        tiers = [_tier(3, 1, priority=2), _tier(2, 5, priority=1), _tier(1, 1, priority=1)]
        assert [t.id for t in order_tiers(tiers)] == [1, 2, 3]

    def test_find_overlaps(self):
        a = _tier(1, 1, 3)
        b = _tier(2, 3, 6)
        c = _tier(3, 7)
        pairs = find_overlaps([a, b, c])
        assert [(x.id, y.id) for x, y in pairs] == [(1, 2)]

    def test_unbounded_tiers_overlap(self):
        assert len(find_overlaps([_tier(1, 2), _tier(2, 5)])) == 1

    def test_string_enum_coerced(self):
        tier = RateTier(id=1, rate_plan_id=1, min_nights=1, adjustment_type="multiplier",
                        adjustment_value="1.5")
        assert tier.adjustment_type == AdjustmentType.MULTIPLIER
        assert tier.adjustment_value == Decimal("1.5")

    def test_unknown_adjustment_type(self):
        with pytest.raises(ConfigurationError):
            RateTier(id=1, rate_plan_id=1, min_nights=1, adjustment_type="BOGUS", adjustment_value=1)
