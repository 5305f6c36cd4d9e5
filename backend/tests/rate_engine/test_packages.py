"""
Package pricing aggregator tests
"""
import pytest
from decimal import Decimal

from rate_engine.errors import ConfigurationError, InvalidQuoteRequest
from rate_engine.models import ComponentType, EntityStatus, GuestCounts, RatePackageComponent
from rate_engine.packages import component_unit_price, price_components


def _component(id, unit_price=None, quantity=1, included=False, kind=ComponentType.SERVICE, **bands):
    return RatePackageComponent(
        id=id, rate_plan_id=1, component_type=kind, component_name=f"item {id}",
        quantity=quantity, unit_price=unit_price, is_included=included, **bands,
    )


class TestPriceComponents:

    def test_included_and_extra(self):
        components = [
            _component(1, unit_price=Decimal("25"), included=True),
            _component(2, unit_price=Decimal("50"), quantity=2),
        ]
        result = price_components(components, GuestCounts())
        assert result.extras_total == Decimal("100")
        assert result.included_value == Decimal("25")
        assert len(result.lines) == 2

    def test_included_line_charges_nothing(self):
        result = price_components([_component(1, unit_price=Decimal("25"), included=True)], GuestCounts())
        assert result.lines[0].charged == Decimal("0")
        assert result.lines[0].line_total == Decimal("25")

    def test_empty(self):
        result = price_components([], GuestCounts())
        assert result.extras_total == Decimal("0")
        assert result.included_value == Decimal("0")
        assert result.lines == []

    def test_null_unit_price_is_free(self):
        result = price_components([_component(1)], GuestCounts())
        assert result.extras_total == Decimal("0")

    def test_age_bands(self):
        breakfast = _component(1, kind=ComponentType.MEAL, price_adult=Decimal("18"),
                               price_child=Decimal("9"), price_infant=Decimal("0"))
        guests = GuestCounts(adults=2, children=1, infants=1)
        assert component_unit_price(breakfast, guests) == Decimal("45")

    def test_age_bands_replace_unit_price_and_multiply_by_quantity(self):
        dinner = _component(1, unit_price=Decimal("999"), quantity=2, price_adult=Decimal("30"))
        result = price_components([dinner], GuestCounts(adults=2, children=3))
        assert result.extras_total == Decimal("120")

    def test_discount_component_reduces_extras(self):
        components = [
            _component(1, unit_price=Decimal("40")),
            _component(2, unit_price=Decimal("15"), kind=ComponentType.DISCOUNT),
        ]
        assert price_components(components, GuestCounts()).extras_total == Decimal("25")

    def test_inactive_skipped(self):
        inactive = RatePackageComponent(id=1, rate_plan_id=1, component_type=ComponentType.SERVICE,
                                        unit_price=Decimal("10"), status=EntityStatus.INACTIVE)
        result = price_components([inactive], GuestCounts())
        assert result.extras_total == Decimal("0")
        assert result.lines == []

    def test_quantity_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            price_components([_component(1, unit_price=Decimal("10"), quantity=0)], GuestCounts())

    def test_negative_guest_count_rejected(self):
        with pytest.raises(InvalidQuoteRequest):
            GuestCounts(adults=-1)
