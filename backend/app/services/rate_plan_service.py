"""
Rate plan service
Rate plan CRUD; delete is a soft transition to INACTIVE.
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.models.orm import (
    AuditAction, AuditEntityType, Employee, RateCategory, RateClass, RatePlan, RateType,
)
from app.models.schemas import RatePlanCreate, RatePlanUpdate
from app.services.exceptions import NotFoundError, reject_nulls
from app.services.pagination import paginate
from app.services.rate_audit_service import RateAuditService, snapshot
from rate_engine.models import EntityStatus

logger = logging.getLogger(__name__)


class RatePlanService:
    """Rate plans"""

    def __init__(self, db: Session):
        self.db = db
        self.audit = RateAuditService(db)

    def get_rate_plans(self, code: Optional[str] = None, name: Optional[str] = None,
                       status: Optional[EntityStatus] = None,
                       rate_type_id: Optional[int] = None,
                       page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        """Rate plans matching the filters; code and name match by substring"""
        query = self.db.query(RatePlan)

        if code:
            query = query.filter(RatePlan.code.ilike(f"%{code}%"))
        if name:
            query = query.filter(RatePlan.name.ilike(f"%{name}%"))
        if status:
            query = query.filter(RatePlan.status == status)
        if rate_type_id:
            query = query.filter(RatePlan.rate_type_id == rate_type_id)

        return paginate(query.order_by(RatePlan.code), page, size)

    def get_rate_plan(self, rate_plan_id: int) -> RatePlan:
        rate_plan = self.db.query(RatePlan).filter(RatePlan.id == rate_plan_id).first()
        if not rate_plan:
            raise NotFoundError("Rate plan", rate_plan_id)
        return rate_plan

    def _check_code_unique(self, code: str, exclude_id: Optional[int] = None):
        query = self.db.query(RatePlan).filter(RatePlan.code == code)
        if exclude_id is not None:
            query = query.filter(RatePlan.id != exclude_id)
        if query.first():
            raise ValueError(f"Rate plan code {code} already exists")

    def _check_classification(self, rate_plan: RatePlan):
        """Referenced taxonomy rows must exist; a class must belong to the plan's category"""
        if rate_plan.rate_type_id and not self.db.get(RateType, rate_plan.rate_type_id):
            raise ValueError(f"Rate type {rate_plan.rate_type_id} does not exist")
        if rate_plan.rate_category_id and not self.db.get(RateCategory, rate_plan.rate_category_id):
            raise ValueError(f"Rate category {rate_plan.rate_category_id} does not exist")
        if rate_plan.rate_class_id:
            rate_class = self.db.get(RateClass, rate_plan.rate_class_id)
            if not rate_class:
                raise ValueError(f"Rate class {rate_plan.rate_class_id} does not exist")
            if rate_plan.rate_category_id and rate_class.rate_category_id != rate_plan.rate_category_id:
                raise ValueError("Rate class does not belong to the selected rate category")

    @staticmethod
    def _check_validity(rate_plan: RatePlan):
        if rate_plan.valid_from and rate_plan.valid_to and rate_plan.valid_to < rate_plan.valid_from:
            raise ValueError("valid_to must not be earlier than valid_from")

    def create_rate_plan(self, data: RatePlanCreate, user: Optional[Employee] = None) -> RatePlan:
        self._check_code_unique(data.code)

        values = data.model_dump()
        values["currency"] = (values.get("currency") or settings.DEFAULT_CURRENCY).upper()
        rate_plan = RatePlan(**values, created_by=user.id if user else None)
        self._check_classification(rate_plan)

        self.db.add(rate_plan)
        self.db.flush()
        self.audit.record(AuditEntityType.RATE_PLAN, rate_plan.id, AuditAction.CREATE, user,
                          entity_name=rate_plan.code, new=snapshot(rate_plan))
        self.db.commit()
        self.db.refresh(rate_plan)
        logger.info(f"Created rate plan {rate_plan.code}")
        return rate_plan

    def update_rate_plan(self, rate_plan_id: int, data: RatePlanUpdate,
                         user: Optional[Employee] = None) -> RatePlan:
        rate_plan = self.get_rate_plan(rate_plan_id)
        previous = snapshot(rate_plan)

        update_data = data.model_dump(exclude_unset=True)
        reject_nulls(update_data, ("code", "name", "currency", "status", "is_package"))
        if update_data.get("code"):
            self._check_code_unique(update_data["code"], exclude_id=rate_plan_id)
        if update_data.get("currency"):
            update_data["currency"] = update_data["currency"].upper()

        for key, value in update_data.items():
            setattr(rate_plan, key, value)

        try:
            self._check_validity(rate_plan)
            self._check_classification(rate_plan)
        except ValueError:
            self.db.rollback()
            raise

        self.audit.record(AuditEntityType.RATE_PLAN, rate_plan.id, AuditAction.UPDATE, user,
                          entity_name=rate_plan.code, previous=previous, new=snapshot(rate_plan))
        self.db.commit()
        self.db.refresh(rate_plan)
        logger.info(f"Updated rate plan {rate_plan.code}")
        return rate_plan

    def delete_rate_plan(self, rate_plan_id: int, user: Optional[Employee] = None) -> RatePlan:
        """Soft delete: the row stays, status becomes INACTIVE"""
        rate_plan = self.get_rate_plan(rate_plan_id)
        previous = snapshot(rate_plan)

        rate_plan.status = EntityStatus.INACTIVE
        self.audit.record(AuditEntityType.RATE_PLAN, rate_plan.id, AuditAction.DELETE, user,
                          entity_name=rate_plan.code, previous=previous, new=snapshot(rate_plan))
        self.db.commit()
        self.db.refresh(rate_plan)
        logger.info(f"Deactivated rate plan {rate_plan.code}")
        return rate_plan
