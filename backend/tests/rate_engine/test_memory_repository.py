"""
InMemoryRateRepository tests
"""
import pytest
from datetime import date
from decimal import Decimal

from rate_engine.models import OverrideType, RateOverride, RatePlan
from rate_engine.repository import InMemoryRateRepository


def _override(id, room_type_id=None, on=date(2025, 6, 1), plan=1):
    return RateOverride(id=id, rate_plan_id=plan, room_type_id=room_type_id, override_date=on,
                        override_type=OverrideType.FIXED, override_value=Decimal("50"))


class TestInMemoryRateRepository:

    def test_plan_lookup(self):
        repo = InMemoryRateRepository()
        repo.add_rate_plan(RatePlan(id=1, code="BAR"))
        assert repo.get_rate_plan(1).code == "BAR"
        assert repo.get_rate_plan(2) is None

    def test_dated_rate_wins_over_default(self):
        repo = InMemoryRateRepository()
        repo.set_base_rate(1, 10, "100")
        repo.set_base_rate(1, 10, 130.5, on_date=date(2025, 6, 1))
        assert repo.get_base_rate(1, 10, date(2025, 6, 1)) == Decimal("130.5")
        assert repo.get_base_rate(1, 10, date(2025, 6, 2)) == Decimal("100")

    def test_missing_base_rate(self):
        with pytest.raises(LookupError):
            InMemoryRateRepository().get_base_rate(1, 10, date(2025, 6, 1))

    def test_list_overrides_scope(self):
        repo = InMemoryRateRepository()
        repo.add_override(_override(1))
        repo.add_override(_override(2, room_type_id=10))
        repo.add_override(_override(3, room_type_id=11))
        repo.add_override(_override(4, plan=2))
        assert {o.id for o in repo.list_overrides(1)} == {1, 2, 3}
        assert {o.id for o in repo.list_overrides(1, room_type_id=10)} == {1, 2}

    def test_list_overrides_by_date(self):
        repo = InMemoryRateRepository()
        repo.add_override(_override(1))
        repo.add_override(_override(2, on=date(2025, 6, 2)))
        assert [o.id for o in repo.list_overrides(1, on_date=date(2025, 6, 2))] == [2]
