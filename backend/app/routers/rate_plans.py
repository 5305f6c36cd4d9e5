"""
Rate plan routes
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee, RatePlan
from app.models.schemas import Page, RatePlanCreate, RatePlanUpdate, RatePlanResponse
from app.services.exceptions import NotFoundError
from app.services.rate_plan_service import RatePlanService
from app.security.auth import require_permission
from app.security.permissions import RATE_READ, RATE_WRITE
from rate_engine.models import EntityStatus

router = APIRouter(prefix="/rate-plans", tags=["Rate plans"])


def to_response(plan: RatePlan) -> RatePlanResponse:
    return RatePlanResponse(
        id=plan.id,
        code=plan.code,
        name=plan.name,
        description=plan.description,
        currency=plan.currency,
        status=plan.status,
        is_package=bool(plan.is_package),
        valid_from=plan.valid_from,
        valid_to=plan.valid_to,
        rate_type_id=plan.rate_type_id,
        rate_type_name=plan.rate_type.name if plan.rate_type else None,
        rate_category_id=plan.rate_category_id,
        rate_category_name=plan.rate_category.name if plan.rate_category else None,
        rate_class_id=plan.rate_class_id,
        rate_class_name=plan.rate_class.name if plan.rate_class else None,
        created_at=plan.created_at,
        updated_at=plan.updated_at
    )


@router.get("", response_model=Page[RatePlanResponse])
def list_rate_plans(
    code: Optional[str] = None,
    name: Optional[str] = None,
    status_filter: Optional[EntityStatus] = Query(None, alias="status"),
    rate_type_id: Optional[int] = None,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """List rate plans"""
    service = RatePlanService(db)
    result = service.get_rate_plans(code, name, status_filter, rate_type_id, page, size)
    result["content"] = [to_response(p) for p in result["content"]]
    return result


@router.get("/{rate_plan_id}", response_model=RatePlanResponse)
def get_rate_plan(
    rate_plan_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """Rate plan detail"""
    service = RatePlanService(db)
    try:
        return to_response(service.get_rate_plan(rate_plan_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=RatePlanResponse, status_code=status.HTTP_201_CREATED)
def create_rate_plan(
    data: RatePlanCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Create a rate plan"""
    service = RatePlanService(db)
    try:
        return to_response(service.create_rate_plan(data, current_user))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{rate_plan_id}", response_model=RatePlanResponse)
def update_rate_plan(
    rate_plan_id: int,
    data: RatePlanUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Update a rate plan"""
    service = RatePlanService(db)
    try:
        return to_response(service.update_rate_plan(rate_plan_id, data, current_user))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{rate_plan_id}", response_model=RatePlanResponse)
def delete_rate_plan(
    rate_plan_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Deactivate a rate plan; the row is kept"""
    service = RatePlanService(db)
    try:
        return to_response(service.delete_rate_plan(rate_plan_id, current_user))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
