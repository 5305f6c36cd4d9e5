"""
Room type service
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.models.orm import RoomType
from app.models.schemas import RoomTypeCreate, RoomTypeUpdate
from app.services.exceptions import NotFoundError, reject_nulls
from app.services.pagination import paginate
from rate_engine.models import EntityStatus

logger = logging.getLogger(__name__)


class RoomTypeService:
    """Room type inventory"""

    def __init__(self, db: Session):
        self.db = db

    def get_room_types(self, status: Optional[EntityStatus] = None,
                       page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        query = self.db.query(RoomType)
        if status:
            query = query.filter(RoomType.status == status)
        return paginate(query.order_by(RoomType.code), page, size)

    def get_room_type(self, room_type_id: int) -> RoomType:
        room_type = self.db.query(RoomType).filter(RoomType.id == room_type_id).first()
        if not room_type:
            raise NotFoundError("Room type", room_type_id)
        return room_type

    def create_room_type(self, data: RoomTypeCreate) -> RoomType:
        if self.db.query(RoomType).filter(RoomType.code == data.code).first():
            raise ValueError(f"Room type code {data.code} already exists")

        room_type = RoomType(**data.model_dump())
        self.db.add(room_type)
        self.db.commit()
        self.db.refresh(room_type)
        logger.info(f"Created room type {room_type.code}")
        return room_type

    def update_room_type(self, room_type_id: int, data: RoomTypeUpdate) -> RoomType:
        room_type = self.get_room_type(room_type_id)

        update_data = data.model_dump(exclude_unset=True)
        reject_nulls(update_data, ("name", "base_price", "max_occupancy", "status"))

        for key, value in update_data.items():
            setattr(room_type, key, value)

        self.db.commit()
        self.db.refresh(room_type)
        logger.info(f"Updated room type {room_type.code}")
        return room_type
