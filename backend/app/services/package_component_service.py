"""
Package component service
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.models.orm import AuditAction, AuditEntityType, Employee, RatePackageComponent, RatePlan
from app.models.schemas import PackageComponentCreate, PackageComponentUpdate
from app.services.exceptions import NotFoundError, reject_nulls
from app.services.pagination import paginate
from app.services.rate_audit_service import RateAuditService, snapshot
from rate_engine.models import ComponentType, EntityStatus

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("component_type", "component_name", "quantity", "is_included", "status")


class PackageComponentService:
    """Items bundled into package rate plans"""

    def __init__(self, db: Session):
        self.db = db
        self.audit = RateAuditService(db)

    def get_components(self, rate_plan_id: Optional[int] = None,
                       component_type: Optional[ComponentType] = None,
                       is_included: Optional[bool] = None,
                       status: Optional[EntityStatus] = None,
                       page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        query = self.db.query(RatePackageComponent)
        if rate_plan_id:
            query = query.filter(RatePackageComponent.rate_plan_id == rate_plan_id)
        if component_type:
            query = query.filter(RatePackageComponent.component_type == component_type)
        if is_included is not None:
            query = query.filter(RatePackageComponent.is_included == is_included)
        if status:
            query = query.filter(RatePackageComponent.status == status)
        query = query.order_by(RatePackageComponent.rate_plan_id, RatePackageComponent.id)
        return paginate(query, page, size)

    def get_component(self, component_id: int) -> RatePackageComponent:
        component = self.db.query(RatePackageComponent).filter(
            RatePackageComponent.id == component_id
        ).first()
        if not component:
            raise NotFoundError("Package component", component_id)
        return component

    def create_component(self, data: PackageComponentCreate,
                         user: Optional[Employee] = None) -> RatePackageComponent:
        rate_plan = self.db.get(RatePlan, data.rate_plan_id)
        if not rate_plan:
            raise ValueError(f"Rate plan {data.rate_plan_id} does not exist")

        component = RatePackageComponent(**data.model_dump())
        self.db.add(component)
        # a plan with components is a package
        if not rate_plan.is_package:
            rate_plan.is_package = True
        self.db.flush()
        self.audit.record(AuditEntityType.RATE_PACKAGE_COMPONENT, component.id, AuditAction.CREATE, user,
                          entity_name=component.component_name, new=snapshot(component))
        self.db.commit()
        self.db.refresh(component)
        logger.info(f"Added {component.component_type.value} component '{component.component_name}' "
                    f"to rate plan {rate_plan.code}")
        return component

    def update_component(self, component_id: int, data: PackageComponentUpdate,
                         user: Optional[Employee] = None) -> RatePackageComponent:
        component = self.get_component(component_id)
        previous = snapshot(component)

        update_data = data.model_dump(exclude_unset=True)
        reject_nulls(update_data, REQUIRED_FIELDS)

        for key, value in update_data.items():
            setattr(component, key, value)

        self.audit.record(AuditEntityType.RATE_PACKAGE_COMPONENT, component.id, AuditAction.PACKAGE_UPDATE,
                          user, entity_name=component.component_name, previous=previous,
                          new=snapshot(component))
        self.db.commit()
        self.db.refresh(component)
        logger.info(f"Updated package component {component_id}")
        return component

    def delete_component(self, component_id: int, user: Optional[Employee] = None) -> bool:
        component = self.get_component(component_id)
        self.audit.record(AuditEntityType.RATE_PACKAGE_COMPONENT, component.id, AuditAction.DELETE, user,
                          entity_name=component.component_name, previous=snapshot(component))
        self.db.delete(component)
        self.db.commit()
        logger.info(f"Deleted package component {component_id}")
        return True
