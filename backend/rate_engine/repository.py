"""
rate_engine/repository.py

Read-only data access contract used by the quote functions, plus an
in-memory implementation for previews and tests.
"""
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from rate_engine.models import RateOverride, RatePackageComponent, RatePlan, RateTier
from rate_engine.money import to_decimal


class RateRepository(ABC):
    """Source of rate configuration for a quote."""

    @abstractmethod
    def get_rate_plan(self, rate_plan_id: int) -> Optional[RatePlan]:
        raise NotImplementedError

    @abstractmethod
    def get_base_rate(self, rate_plan_id: int, room_type_id: Optional[int], on_date: date) -> Decimal:
        """
        Nightly base rate before any adjustment.

        Raises:
            LookupError: If no base rate can be determined.
        """
        raise NotImplementedError

    @abstractmethod
    def list_tiers(self, rate_plan_id: int) -> List[RateTier]:
        raise NotImplementedError

    @abstractmethod
    def list_overrides(
        self,
        rate_plan_id: int,
        room_type_id: Optional[int] = None,
        on_date: Optional[date] = None,
    ) -> List[RateOverride]:
        """
        Overrides of the plan. With ``room_type_id`` the result holds that
        room type's overrides and the plan-wide ones.
        """
        raise NotImplementedError

    @abstractmethod
    def list_components(self, rate_plan_id: int) -> List[RatePackageComponent]:
        raise NotImplementedError


class InMemoryRateRepository(RateRepository):
    """
    Dict-backed repository.

    Example:
        >>> repo = InMemoryRateRepository()
        >>> repo.add_rate_plan(RatePlan(id=1, code="BAR"))
        >>> repo.set_base_rate(1, 10, Decimal("100"))
    """

    def __init__(self):
        self._plans: Dict[int, RatePlan] = {}
        self._tiers: List[RateTier] = []
        self._overrides: List[RateOverride] = []
        self._components: List[RatePackageComponent] = []
        # (rate_plan_id, room_type_id) -> default base rate
        self._base_rates: Dict[Tuple[int, Optional[int]], Decimal] = {}
        # (rate_plan_id, room_type_id, date) -> dated base rate
        self._dated_rates: Dict[Tuple[int, Optional[int], date], Decimal] = {}

    def add_rate_plan(self, plan: RatePlan) -> None:
        self._plans[plan.id] = plan

    def add_tier(self, tier: RateTier) -> None:
        self._tiers.append(tier)

    def add_override(self, override: RateOverride) -> None:
        self._overrides.append(override)

    def add_component(self, component: RatePackageComponent) -> None:
        self._components.append(component)

    def set_base_rate(self, rate_plan_id: int, room_type_id: Optional[int], amount,
                      on_date: Optional[date] = None) -> None:
        if on_date is None:
            self._base_rates[(rate_plan_id, room_type_id)] = to_decimal(amount, "base_rate")
        else:
            self._dated_rates[(rate_plan_id, room_type_id, on_date)] = to_decimal(amount, "base_rate")

    def get_rate_plan(self, rate_plan_id: int) -> Optional[RatePlan]:
        return self._plans.get(rate_plan_id)

    def get_base_rate(self, rate_plan_id: int, room_type_id: Optional[int], on_date: date) -> Decimal:
        dated = self._dated_rates.get((rate_plan_id, room_type_id, on_date))
        if dated is not None:
            return dated
        try:
            return self._base_rates[(rate_plan_id, room_type_id)]
        except KeyError:
            raise LookupError(
                f"No base rate for rate plan {rate_plan_id}, room type {room_type_id}"
            )

    def list_tiers(self, rate_plan_id: int) -> List[RateTier]:
        return [t for t in self._tiers if t.rate_plan_id == rate_plan_id]

    def list_overrides(self, rate_plan_id: int, room_type_id: Optional[int] = None,
                       on_date: Optional[date] = None) -> List[RateOverride]:
        result = []
        for o in self._overrides:
            if o.rate_plan_id != rate_plan_id:
                continue
            if room_type_id is not None and o.room_type_id not in (None, room_type_id):
                continue
            if on_date is not None and o.override_date != on_date:
                continue
            result.append(o)
        return result

    def list_components(self, rate_plan_id: int) -> List[RatePackageComponent]:
        return [c for c in self._components if c.rate_plan_id == rate_plan_id]


__all__ = ["RateRepository", "InMemoryRateRepository"]
