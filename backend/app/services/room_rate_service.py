"""
Room rate service
Published per-day base rates and stop-sell flags.
"""
import logging
from datetime import date
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.models.orm import AuditAction, AuditEntityType, Employee, RatePlan, RoomRate, RoomType
from app.models.schemas import RoomRateCreate, RoomRateUpdate
from app.services.exceptions import NotFoundError, reject_nulls
from app.services.pagination import paginate
from app.services.rate_audit_service import RateAuditService, snapshot

logger = logging.getLogger(__name__)


def _label(room_rate: RoomRate) -> str:
    return f"{room_rate.rate_plan_id}/{room_rate.room_type_id}/{room_rate.rate_date.isoformat()}"


class RoomRateService:
    """Published base rates"""

    def __init__(self, db: Session):
        self.db = db
        self.audit = RateAuditService(db)

    def get_room_rates(self, rate_plan_id: Optional[int] = None,
                       room_type_id: Optional[int] = None,
                       start_date: Optional[date] = None,
                       end_date: Optional[date] = None,
                       page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        query = self.db.query(RoomRate)
        if rate_plan_id:
            query = query.filter(RoomRate.rate_plan_id == rate_plan_id)
        if room_type_id:
            query = query.filter(RoomRate.room_type_id == room_type_id)
        if start_date:
            query = query.filter(RoomRate.rate_date >= start_date)
        if end_date:
            query = query.filter(RoomRate.rate_date <= end_date)
        query = query.order_by(RoomRate.rate_date, RoomRate.rate_plan_id, RoomRate.room_type_id)
        return paginate(query, page, size)

    def get_room_rate(self, room_rate_id: int) -> RoomRate:
        room_rate = self.db.query(RoomRate).filter(RoomRate.id == room_rate_id).first()
        if not room_rate:
            raise NotFoundError("Room rate", room_rate_id)
        return room_rate

    def create_room_rate(self, data: RoomRateCreate, user: Optional[Employee] = None) -> RoomRate:
        rate_plan = self.db.get(RatePlan, data.rate_plan_id)
        if not rate_plan:
            raise ValueError(f"Rate plan {data.rate_plan_id} does not exist")
        if not self.db.get(RoomType, data.room_type_id):
            raise ValueError(f"Room type {data.room_type_id} does not exist")

        existing = self.db.query(RoomRate).filter(
            RoomRate.rate_plan_id == data.rate_plan_id,
            RoomRate.room_type_id == data.room_type_id,
            RoomRate.rate_date == data.rate_date,
        ).first()
        if existing:
            raise ValueError(f"A room rate already exists for {data.rate_date.isoformat()}")

        values = data.model_dump()
        values["currency"] = (values.get("currency") or rate_plan.currency).upper()
        room_rate = RoomRate(**values)
        self.db.add(room_rate)
        self.db.flush()
        self.audit.record(AuditEntityType.ROOM_RATE, room_rate.id, AuditAction.CREATE, user,
                          entity_name=_label(room_rate), new=snapshot(room_rate))
        self.db.commit()
        self.db.refresh(room_rate)
        logger.info(f"Published room rate {_label(room_rate)}: {room_rate.rate_amount}")
        return room_rate

    def update_room_rate(self, room_rate_id: int, data: RoomRateUpdate,
                         user: Optional[Employee] = None) -> RoomRate:
        room_rate = self.get_room_rate(room_rate_id)
        previous = snapshot(room_rate)

        update_data = data.model_dump(exclude_unset=True)
        reject_nulls(update_data, ("rate_amount", "stop_sell", "status"))
        if update_data.get("currency"):
            update_data["currency"] = update_data["currency"].upper()
        stop_sell_changed = "stop_sell" in update_data and update_data["stop_sell"] != room_rate.stop_sell

        for key, value in update_data.items():
            setattr(room_rate, key, value)

        action = AuditAction.STOP_SELL if stop_sell_changed else AuditAction.RATE_CHANGE
        self.audit.record(AuditEntityType.ROOM_RATE, room_rate.id, action, user,
                          entity_name=_label(room_rate), previous=previous, new=snapshot(room_rate))
        self.db.commit()
        self.db.refresh(room_rate)
        logger.info(f"Updated room rate {_label(room_rate)}")
        return room_rate

    def delete_room_rate(self, room_rate_id: int, user: Optional[Employee] = None) -> bool:
        room_rate = self.get_room_rate(room_rate_id)
        self.audit.record(AuditEntityType.ROOM_RATE, room_rate.id, AuditAction.DELETE, user,
                          entity_name=_label(room_rate), previous=snapshot(room_rate))
        self.db.delete(room_rate)
        self.db.commit()
        return True
