"""
Rate classification service
RateCategory -> RateClass, plus the flat RateType tag. No pricing semantics;
a row can only be deleted while nothing references it.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from app.models.orm import (
    AuditAction, AuditEntityType, Employee, RateCategory, RateClass, RatePlan, RateType,
)
from app.services.exceptions import NotFoundError, reject_nulls
from app.services.pagination import paginate
from app.services.rate_audit_service import RateAuditService, snapshot
from rate_engine.models import EntityStatus

logger = logging.getLogger(__name__)


class ClassificationService:
    """Shared CRUD for the taxonomy tables"""

    model = None
    entity_type: AuditEntityType = None
    label = ""
    required_fields = ("code", "name", "status")

    def __init__(self, db: Session):
        self.db = db
        self.audit = RateAuditService(db)

    def _references(self, row) -> List[Tuple[str, int]]:
        """(kind, count) pairs of rows pointing at ``row``"""
        return []

    def list(self, code: Optional[str] = None, name: Optional[str] = None,
             status: Optional[EntityStatus] = None,
             page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        query = self.db.query(self.model)
        if code:
            query = query.filter(self.model.code.ilike(f"%{code}%"))
        if name:
            query = query.filter(self.model.name.ilike(f"%{name}%"))
        if status:
            query = query.filter(self.model.status == status)
        return paginate(query.order_by(self.model.code), page, size)

    def get(self, row_id: int):
        row = self.db.query(self.model).filter(self.model.id == row_id).first()
        if not row:
            raise NotFoundError(self.label, row_id)
        return row

    def _check_code_unique(self, code: str, exclude_id: Optional[int] = None):
        query = self.db.query(self.model).filter(self.model.code == code)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        if query.first():
            raise ValueError(f"{self.label} code {code} already exists")

    def _check_parent(self, values: Dict[str, Any]):
        pass

    def create(self, data, user: Optional[Employee] = None):
        values = data.model_dump()
        self._check_code_unique(values["code"])
        self._check_parent(values)

        row = self.model(**values)
        self.db.add(row)
        self.db.flush()
        self.audit.record(self.entity_type, row.id, AuditAction.CREATE, user,
                          entity_name=row.code, new=snapshot(row))
        self.db.commit()
        self.db.refresh(row)
        logger.info(f"Created {self.label.lower()} {row.code}")
        return row

    def update(self, row_id: int, data, user: Optional[Employee] = None):
        row = self.get(row_id)
        previous = snapshot(row)

        update_data = data.model_dump(exclude_unset=True)
        reject_nulls(update_data, self.required_fields)
        if update_data.get("code"):
            self._check_code_unique(update_data["code"], exclude_id=row_id)
        self._check_parent(update_data)

        for key, value in update_data.items():
            setattr(row, key, value)

        self.audit.record(self.entity_type, row.id, AuditAction.UPDATE, user,
                          entity_name=row.code, previous=previous, new=snapshot(row))
        self.db.commit()
        self.db.refresh(row)
        return row

    def delete(self, row_id: int, user: Optional[Employee] = None) -> bool:
        row = self.get(row_id)
        in_use = [f"{count} {kind}" for kind, count in self._references(row) if count]
        if in_use:
            raise ValueError(f"{self.label} {row.code} is still referenced by {', '.join(in_use)}")

        self.audit.record(self.entity_type, row.id, AuditAction.DELETE, user,
                          entity_name=row.code, previous=snapshot(row))
        self.db.delete(row)
        self.db.commit()
        logger.info(f"Deleted {self.label.lower()} {row_id}")
        return True


class RateCategoryService(ClassificationService):
    model = RateCategory
    entity_type = AuditEntityType.RATE_CATEGORY
    label = "Rate category"

    def _references(self, row):
        return [
            ("rate classes", self.db.query(RateClass).filter(RateClass.rate_category_id == row.id).count()),
            ("rate plans", self.db.query(RatePlan).filter(RatePlan.rate_category_id == row.id).count()),
        ]


class RateClassService(ClassificationService):
    model = RateClass
    entity_type = AuditEntityType.RATE_CLASS
    label = "Rate class"
    required_fields = ("code", "name", "status", "rate_category_id")

    def _check_parent(self, values):
        category_id = values.get("rate_category_id")
        if category_id is not None and not self.db.get(RateCategory, category_id):
            raise ValueError(f"Rate category {category_id} does not exist")

    def _references(self, row):
        return [
            ("rate plans", self.db.query(RatePlan).filter(RatePlan.rate_class_id == row.id).count()),
        ]


class RateTypeService(ClassificationService):
    model = RateType
    entity_type = AuditEntityType.RATE_TYPE
    label = "Rate type"

    def _references(self, row):
        return [
            ("rate plans", self.db.query(RatePlan).filter(RatePlan.rate_type_id == row.id).count()),
        ]
