"""
SQLAlchemy implementation of rate_engine's RateRepository
Maps ORM rows onto the pricing engine's dataclasses.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models import orm
from rate_engine import models as core
from rate_engine.errors import RatePlanUnavailable
from rate_engine.models import EntityStatus
from rate_engine.repository import RateRepository

logger = logging.getLogger(__name__)


class StopSellError(RatePlanUnavailable):
    """The room type is closed for sale on the date"""

    def __init__(self, rate_plan_id: int, room_type_id: int, on_date: date):
        super().__init__(rate_plan_id, f"STOP_SELL for room type {room_type_id} on {on_date.isoformat()}")
        self.room_type_id = room_type_id
        self.on_date = on_date


def to_core_plan(row: orm.RatePlan) -> core.RatePlan:
    return core.RatePlan(
        id=row.id,
        code=row.code,
        name=row.name,
        currency=row.currency,
        status=row.status,
    )


def to_core_tier(row: orm.RateTier) -> core.RateTier:
    return core.RateTier(
        id=row.id,
        rate_plan_id=row.rate_plan_id,
        min_nights=row.min_nights,
        max_nights=row.max_nights,
        adjustment_type=row.adjustment_type,
        adjustment_value=row.adjustment_value,
        priority=row.priority or 0,
        status=row.status,
    )


def to_core_override(row: orm.RateOverride) -> core.RateOverride:
    return core.RateOverride(
        id=row.id,
        rate_plan_id=row.rate_plan_id,
        room_type_id=row.room_type_id,
        override_date=row.override_date,
        override_type=row.override_type,
        override_value=row.override_value,
        reason=row.reason,
        status=row.status,
    )


def to_core_component(row: orm.RatePackageComponent) -> core.RatePackageComponent:
    return core.RatePackageComponent(
        id=row.id,
        rate_plan_id=row.rate_plan_id,
        component_type=row.component_type,
        component_code=row.component_code,
        component_name=row.component_name,
        quantity=row.quantity,
        unit_price=row.unit_price,
        price_adult=row.price_adult,
        price_child=row.price_child,
        price_infant=row.price_infant,
        is_included=bool(row.is_included),
        status=row.status,
    )


class SqlAlchemyRateRepository(RateRepository):
    """Reads rate configuration through a request-scoped session"""

    def __init__(self, db: Session):
        self.db = db

    def get_rate_plan(self, rate_plan_id: int) -> Optional[core.RatePlan]:
        row = self.db.query(orm.RatePlan).filter(orm.RatePlan.id == rate_plan_id).first()
        return to_core_plan(row) if row else None

    def get_room_rate(self, rate_plan_id: int, room_type_id: int, on_date: date) -> Optional[orm.RoomRate]:
        return self.db.query(orm.RoomRate).filter(
            orm.RoomRate.rate_plan_id == rate_plan_id,
            orm.RoomRate.room_type_id == room_type_id,
            orm.RoomRate.rate_date == on_date,
            orm.RoomRate.status == EntityStatus.ACTIVE,
        ).first()

    def get_base_rate(self, rate_plan_id: int, room_type_id: Optional[int], on_date: date) -> Decimal:
        """
        Published RoomRate for the date, else the room type's base price.

        Raises:
            StopSellError: The date is closed by stop-sell.
            LookupError: Unknown room type.
        """
        if room_type_id is None:
            raise LookupError("room_type_id is required to determine a base rate")

        room_rate = self.get_room_rate(rate_plan_id, room_type_id, on_date)
        if room_rate is not None:
            if room_rate.stop_sell:
                raise StopSellError(rate_plan_id, room_type_id, on_date)
            return Decimal(room_rate.rate_amount)

        room_type = self.db.query(orm.RoomType).filter(orm.RoomType.id == room_type_id).first()
        if room_type is None:
            raise LookupError(f"Room type {room_type_id} not found")
        logger.debug("No room rate for plan %s room type %s on %s, using base price",
                     rate_plan_id, room_type_id, on_date)
        return Decimal(room_type.base_price)

    def list_tiers(self, rate_plan_id: int) -> List[core.RateTier]:
        rows = self.db.query(orm.RateTier).filter(orm.RateTier.rate_plan_id == rate_plan_id).all()
        return [to_core_tier(r) for r in rows]

    def list_overrides(self, rate_plan_id: int, room_type_id: Optional[int] = None,
                       on_date: Optional[date] = None) -> List[core.RateOverride]:
        query = self.db.query(orm.RateOverride).filter(orm.RateOverride.rate_plan_id == rate_plan_id)
        if room_type_id is not None:
            query = query.filter(or_(
                orm.RateOverride.room_type_id.is_(None),
                orm.RateOverride.room_type_id == room_type_id,
            ))
        if on_date is not None:
            query = query.filter(orm.RateOverride.override_date == on_date)
        return [to_core_override(r) for r in query.all()]

    def list_components(self, rate_plan_id: int) -> List[core.RatePackageComponent]:
        rows = self.db.query(orm.RatePackageComponent).filter(
            orm.RatePackageComponent.rate_plan_id == rate_plan_id
        ).all()
        return [to_core_component(r) for r in rows]
