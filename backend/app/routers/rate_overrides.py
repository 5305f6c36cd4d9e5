"""
Rate override routes
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee, RateOverride
from app.models.schemas import Page, RateOverrideCreate, RateOverrideUpdate, RateOverrideResponse
from app.services.exceptions import NotFoundError
from app.services.rate_override_service import RateOverrideService
from app.security.auth import require_permission
from app.security.permissions import RATE_READ, RATE_WRITE
from rate_engine.models import EntityStatus, OverrideType

router = APIRouter(prefix="/rate-overrides", tags=["Rate overrides"])


def to_response(override: RateOverride) -> RateOverrideResponse:
    return RateOverrideResponse(
        id=override.id,
        rate_plan_id=override.rate_plan_id,
        rate_plan_code=override.rate_plan.code if override.rate_plan else None,
        rate_plan_name=override.rate_plan.name if override.rate_plan else None,
        room_type_id=override.room_type_id,
        room_type_code=override.room_type.code if override.room_type else None,
        room_type_name=override.room_type.name if override.room_type else None,
        override_date=override.override_date,
        override_type=override.override_type,
        override_value=override.override_value,
        reason=override.reason,
        status=override.status,
        created_at=override.created_at,
        updated_at=override.updated_at
    )


@router.get("", response_model=Page[RateOverrideResponse])
def list_overrides(
    rate_plan_id: Optional[int] = None,
    room_type_id: Optional[int] = None,
    override_date: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    override_type: Optional[OverrideType] = None,
    status_filter: Optional[EntityStatus] = Query(None, alias="status"),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """List overrides"""
    service = RateOverrideService(db)
    result = service.get_overrides(rate_plan_id, room_type_id, override_date, start_date,
                                   end_date, override_type, status_filter, page, size)
    result["content"] = [to_response(o) for o in result["content"]]
    return result


@router.get("/{override_id}", response_model=RateOverrideResponse)
def get_override(
    override_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """Override detail"""
    service = RateOverrideService(db)
    try:
        return to_response(service.get_override(override_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=RateOverrideResponse, status_code=status.HTTP_201_CREATED)
def create_override(
    data: RateOverrideCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Create an override"""
    service = RateOverrideService(db)
    try:
        return to_response(service.create_override(data, current_user))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{override_id}", response_model=RateOverrideResponse)
def update_override(
    override_id: int,
    data: RateOverrideUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Update an override"""
    service = RateOverrideService(db)
    try:
        return to_response(service.update_override(override_id, data, current_user))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{override_id}")
def delete_override(
    override_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Delete an override"""
    service = RateOverrideService(db)
    try:
        service.delete_override(override_id, current_user)
        return {"message": "Deleted"}
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
