"""
Rate audit service
Records a JSON snapshot of every rate configuration change.
"""
import json
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.models.orm import AuditAction, AuditEntityType, Employee, RateAuditLog
from app.services.pagination import paginate

logger = logging.getLogger(__name__)


def snapshot(entity) -> Dict[str, Any]:
    """Column values of an ORM object as a plain dict"""
    result = {}
    for column in inspect(entity).mapper.column_attrs:
        value = getattr(entity, column.key)
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        elif isinstance(value, Decimal):
            value = str(value)
        result[column.key] = value
    return result


class RateAuditService:
    """Rate audit trail"""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        entity_type: AuditEntityType,
        entity_id: int,
        action: AuditAction,
        user: Optional[Employee] = None,
        entity_name: Optional[str] = None,
        previous: Optional[Dict[str, Any]] = None,
        new: Optional[Dict[str, Any]] = None,
    ) -> RateAuditLog:
        """
        Add an audit entry to the current session.

        The caller commits, so the entry lands in the same transaction as
        the change it describes.
        """
        entry = RateAuditLog(
            entity_type=entity_type,
            entity_id=entity_id,
            entity_name=entity_name,
            action=action,
            user_id=user.id if user else None,
            user_name=user.username if user else None,
            previous_value=json.dumps(previous, default=str, ensure_ascii=False) if previous is not None else None,
            new_value=json.dumps(new, default=str, ensure_ascii=False) if new is not None else None,
        )
        self.db.add(entry)
        self.db.flush()

        logger.info(f"Audit {action.value} {entity_type.value}#{entity_id}")
        return entry

    def get_logs(self, entity_type: Optional[AuditEntityType] = None,
                 entity_id: Optional[int] = None,
                 action: Optional[AuditAction] = None,
                 page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        """Audit entries, newest first"""
        query = self.db.query(RateAuditLog)
        if entity_type:
            query = query.filter(RateAuditLog.entity_type == entity_type)
        if entity_id is not None:
            query = query.filter(RateAuditLog.entity_id == entity_id)
        if action:
            query = query.filter(RateAuditLog.action == action)
        query = query.order_by(RateAuditLog.created_at.desc(), RateAuditLog.id.desc())
        return paginate(query, page, size)
