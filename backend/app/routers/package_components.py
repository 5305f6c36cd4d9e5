"""
Package component routes
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee, RatePackageComponent
from app.models.schemas import (
    Page, PackageComponentCreate, PackageComponentUpdate, PackageComponentResponse,
)
from app.services.exceptions import NotFoundError
from app.services.package_component_service import PackageComponentService
from app.security.auth import require_permission
from app.security.permissions import RATE_READ, RATE_WRITE
from rate_engine.models import ComponentType, EntityStatus

router = APIRouter(prefix="/rate-package-components", tags=["Package components"])


def to_response(component: RatePackageComponent) -> PackageComponentResponse:
    plan = component.rate_plan
    return PackageComponentResponse(
        id=component.id,
        rate_plan_id=component.rate_plan_id,
        rate_plan_code=plan.code if plan else None,
        rate_plan_name=plan.name if plan else None,
        component_type=component.component_type,
        component_code=component.component_code,
        component_name=component.component_name,
        description=component.description,
        quantity=component.quantity,
        unit_price=component.unit_price,
        price_adult=component.price_adult,
        price_child=component.price_child,
        price_infant=component.price_infant,
        is_included=bool(component.is_included),
        status=component.status,
        created_at=component.created_at,
        updated_at=component.updated_at
    )


@router.get("", response_model=Page[PackageComponentResponse])
def list_components(
    rate_plan_id: Optional[int] = None,
    component_type: Optional[ComponentType] = None,
    is_included: Optional[bool] = None,
    status_filter: Optional[EntityStatus] = Query(None, alias="status"),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """List package components"""
    service = PackageComponentService(db)
    result = service.get_components(rate_plan_id, component_type, is_included, status_filter, page, size)
    result["content"] = [to_response(c) for c in result["content"]]
    return result


@router.get("/{component_id}", response_model=PackageComponentResponse)
def get_component(
    component_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """Package component detail"""
    service = PackageComponentService(db)
    try:
        return to_response(service.get_component(component_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=PackageComponentResponse, status_code=status.HTTP_201_CREATED)
def create_component(
    data: PackageComponentCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Add a component to a rate plan"""
    service = PackageComponentService(db)
    try:
        return to_response(service.create_component(data, current_user))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{component_id}", response_model=PackageComponentResponse)
def update_component(
    component_id: int,
    data: PackageComponentUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Update a package component"""
    service = PackageComponentService(db)
    try:
        return to_response(service.update_component(component_id, data, current_user))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{component_id}")
def delete_component(
    component_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Remove a package component"""
    service = PackageComponentService(db)
    try:
        service.delete_component(component_id, current_user)
        return {"message": "Deleted"}
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
