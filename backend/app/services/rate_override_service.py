"""
Rate override service
Dated overrides, plan-wide or scoped to one room type.
"""
import logging
from datetime import date
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.models.orm import (
    AuditAction, AuditEntityType, Employee, RateOverride, RatePlan, RoomType,
)
from app.models.schemas import RateOverrideCreate, RateOverrideUpdate
from app.services.exceptions import NotFoundError, reject_nulls
from app.services.pagination import paginate
from app.services.rate_audit_service import RateAuditService, snapshot
from rate_engine.models import EntityStatus, OverrideType

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("override_date", "override_type", "override_value", "status")


def _label(override: RateOverride) -> str:
    scope = override.room_type_id if override.room_type_id is not None else "*"
    return f"{override.rate_plan_id}/{scope}/{override.override_date.isoformat()}"


class RateOverrideService:
    """Rate overrides"""

    def __init__(self, db: Session):
        self.db = db
        self.audit = RateAuditService(db)

    def get_overrides(self, rate_plan_id: Optional[int] = None,
                      room_type_id: Optional[int] = None,
                      override_date: Optional[date] = None,
                      start_date: Optional[date] = None,
                      end_date: Optional[date] = None,
                      override_type: Optional[OverrideType] = None,
                      status: Optional[EntityStatus] = None,
                      page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        query = self.db.query(RateOverride)
        if rate_plan_id:
            query = query.filter(RateOverride.rate_plan_id == rate_plan_id)
        if room_type_id:
            query = query.filter(RateOverride.room_type_id == room_type_id)
        if override_date:
            query = query.filter(RateOverride.override_date == override_date)
        if start_date:
            query = query.filter(RateOverride.override_date >= start_date)
        if end_date:
            query = query.filter(RateOverride.override_date <= end_date)
        if override_type:
            query = query.filter(RateOverride.override_type == override_type)
        if status:
            query = query.filter(RateOverride.status == status)
        query = query.order_by(RateOverride.override_date, RateOverride.id)
        return paginate(query, page, size)

    def get_override(self, override_id: int) -> RateOverride:
        override = self.db.query(RateOverride).filter(RateOverride.id == override_id).first()
        if not override:
            raise NotFoundError("Rate override", override_id)
        return override

    def _check_room_type(self, room_type_id: Optional[int]):
        if room_type_id is not None and not self.db.get(RoomType, room_type_id):
            raise ValueError(f"Room type {room_type_id} does not exist")

    def create_override(self, data: RateOverrideCreate, user: Optional[Employee] = None) -> RateOverride:
        if not self.db.get(RatePlan, data.rate_plan_id):
            raise ValueError(f"Rate plan {data.rate_plan_id} does not exist")
        self._check_room_type(data.room_type_id)

        override = RateOverride(**data.model_dump())
        self.db.add(override)
        self.db.flush()
        self.audit.record(AuditEntityType.RATE_OVERRIDE, override.id, AuditAction.OVERRIDE_CREATE, user,
                          entity_name=_label(override), new=snapshot(override))
        self.db.commit()
        self.db.refresh(override)
        logger.info(f"Created rate override {_label(override)} {override.override_type.value} {override.override_value}")
        return override

    def update_override(self, override_id: int, data: RateOverrideUpdate,
                        user: Optional[Employee] = None) -> RateOverride:
        override = self.get_override(override_id)
        previous = snapshot(override)

        update_data = data.model_dump(exclude_unset=True)
        reject_nulls(update_data, REQUIRED_FIELDS)
        self._check_room_type(update_data.get("room_type_id"))

        for key, value in update_data.items():
            setattr(override, key, value)

        self.audit.record(AuditEntityType.RATE_OVERRIDE, override.id, AuditAction.OVERRIDE_UPDATE, user,
                          entity_name=_label(override), previous=previous, new=snapshot(override))
        self.db.commit()
        self.db.refresh(override)
        logger.info(f"Updated rate override {_label(override)}")
        return override

    def delete_override(self, override_id: int, user: Optional[Employee] = None) -> bool:
        override = self.get_override(override_id)
        self.audit.record(AuditEntityType.RATE_OVERRIDE, override.id, AuditAction.OVERRIDE_DELETE, user,
                          entity_name=_label(override), previous=snapshot(override))
        self.db.delete(override)
        self.db.commit()
        logger.info(f"Deleted rate override {override_id}")
        return True
