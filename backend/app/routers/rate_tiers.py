"""
Rate tier routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee, RateTier
from app.models.schemas import (
    Page, RateTierCreate, RateTierUpdate, RateTierResponse, TierPriorityUpdate,
)
from app.services.exceptions import NotFoundError
from app.services.rate_tier_service import RateTierService
from app.security.auth import require_permission
from app.security.permissions import RATE_READ, RATE_WRITE
from rate_engine.models import AdjustmentType, EntityStatus

router = APIRouter(prefix="/rate-tiers", tags=["Rate tiers"])


def to_response(tier: RateTier) -> RateTierResponse:
    return RateTierResponse(
        id=tier.id,
        rate_plan_id=tier.rate_plan_id,
        rate_plan_code=tier.rate_plan.code if tier.rate_plan else None,
        rate_plan_name=tier.rate_plan.name if tier.rate_plan else None,
        min_nights=tier.min_nights,
        max_nights=tier.max_nights,
        adjustment_type=tier.adjustment_type,
        adjustment_value=tier.adjustment_value,
        priority=tier.priority,
        status=tier.status,
        created_at=tier.created_at,
        updated_at=tier.updated_at
    )


@router.get("", response_model=Page[RateTierResponse])
def list_tiers(
    rate_plan_id: Optional[int] = None,
    adjustment_type: Optional[AdjustmentType] = None,
    status_filter: Optional[EntityStatus] = Query(None, alias="status"),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """List tiers in evaluation order"""
    service = RateTierService(db)
    result = service.get_tiers(rate_plan_id, adjustment_type, status_filter, page, size)
    result["content"] = [to_response(t) for t in result["content"]]
    return result


@router.put("/priorities", response_model=List[RateTierResponse])
def update_priorities(
    items: List[TierPriorityUpdate],
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Reorder tiers; all or nothing"""
    service = RateTierService(db)
    try:
        return [to_response(t) for t in service.update_priorities(items, current_user)]
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{tier_id}", response_model=RateTierResponse)
def get_tier(
    tier_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """Tier detail"""
    service = RateTierService(db)
    try:
        return to_response(service.get_tier(tier_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=RateTierResponse, status_code=status.HTTP_201_CREATED)
def create_tier(
    data: RateTierCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Create a tier"""
    service = RateTierService(db)
    try:
        return to_response(service.create_tier(data, current_user))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{tier_id}", response_model=RateTierResponse)
def update_tier(
    tier_id: int,
    data: RateTierUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Update a tier"""
    service = RateTierService(db)
    try:
        return to_response(service.update_tier(tier_id, data, current_user))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{tier_id}")
def delete_tier(
    tier_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Delete a tier"""
    service = RateTierService(db)
    try:
        service.delete_tier(tier_id, current_user)
        return {"message": "Deleted"}
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
