"""
Adjustment calculator tests
"""
import pytest
from decimal import Decimal

from rate_engine.adjustments import apply_adjustment, apply_tier
from rate_engine.errors import ConfigurationError
from rate_engine.models import AdjustmentType, RateTier


class TestApplyAdjustment:

    @pytest.mark.parametrize("base,value", [
        ("100", "-10"), ("99.99", "12.5"), ("0", "50"), ("153.27", "-33.3333"),
    ])
    def test_percentage_exact(self, base, value):
        r, v = Decimal(base), Decimal(value)
        assert apply_adjustment(r, AdjustmentType.PERCENTAGE, v) == r * (1 + v / Decimal(100))

    def test_percentage_discount(self):
        assert apply_adjustment(Decimal("100"), AdjustmentType.PERCENTAGE, Decimal("-10")) == Decimal("90")

    def test_fixed(self):
        assert apply_adjustment(Decimal("100"), AdjustmentType.FIXED, Decimal("-15")) == Decimal("85")

    def test_fixed_can_go_negative(self):
        assert apply_adjustment(Decimal("50"), AdjustmentType.FIXED, Decimal("-80")) == Decimal("-30")

    def test_multiplier(self):
        assert apply_adjustment(Decimal("100"), AdjustmentType.MULTIPLIER, Decimal("1.2")) == Decimal("120.0")

    @pytest.mark.parametrize("base", ["0", "1", "100", "123.4567"])
    def test_multiplier_one_is_identity(self, base):
        assert apply_adjustment(Decimal(base), AdjustmentType.MULTIPLIER, Decimal("1")) == Decimal(base)

    def test_no_rounding(self):
        result = apply_adjustment(Decimal("10"), AdjustmentType.MULTIPLIER, Decimal("0.333"))
        assert result == Decimal("3.330")

    def test_string_type(self):
        assert apply_adjustment("100", "fixed", "5") == Decimal("105")

    def test_float_goes_through_str(self):
        assert apply_adjustment(0.1, AdjustmentType.FIXED, 0.2) == Decimal("0.3")

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError):
            apply_adjustment(Decimal("100"), "SQUARE", Decimal("2"))

    def test_non_numeric_value(self):
        with pytest.raises(ConfigurationError):
            apply_adjustment(Decimal("100"), AdjustmentType.FIXED, "ten")


class TestApplyTier:

    def test_none_leaves_rate(self):
        assert apply_tier(Decimal("100"), None) == Decimal("100")

    def test_applies_tier(self):
        tier = RateTier(id=1, rate_plan_id=1, min_nights=3, max_nights=6,
                        adjustment_type=AdjustmentType.PERCENTAGE, adjustment_value=Decimal("-10"))
        assert apply_tier(Decimal("100"), tier) == Decimal("90")
