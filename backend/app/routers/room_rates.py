"""
Room rate routes
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee
from app.models.schemas import Page, RoomRateCreate, RoomRateUpdate, RoomRateResponse
from app.services.exceptions import NotFoundError
from app.services.room_rate_service import RoomRateService
from app.security.auth import require_permission
from app.security.permissions import RATE_READ, RATE_WRITE

router = APIRouter(prefix="/room-rates", tags=["Room rates"])


@router.get("", response_model=Page[RoomRateResponse])
def list_room_rates(
    rate_plan_id: Optional[int] = None,
    room_type_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """List published room rates"""
    service = RoomRateService(db)
    result = service.get_room_rates(rate_plan_id, room_type_id, start_date, end_date, page, size)
    result["content"] = [RoomRateResponse.model_validate(r) for r in result["content"]]
    return result


@router.post("", response_model=RoomRateResponse, status_code=status.HTTP_201_CREATED)
def create_room_rate(
    data: RoomRateCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Publish a room rate for one date"""
    service = RoomRateService(db)
    try:
        return service.create_room_rate(data, current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{room_rate_id}", response_model=RoomRateResponse)
def update_room_rate(
    room_rate_id: int,
    data: RoomRateUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Change a room rate or its stop-sell flag"""
    service = RoomRateService(db)
    try:
        return service.update_room_rate(room_rate_id, data, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{room_rate_id}")
def delete_room_rate(
    room_rate_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Remove a room rate; the room type base price applies again"""
    service = RoomRateService(db)
    try:
        service.delete_room_rate(room_rate_id, current_user)
        return {"message": "Deleted"}
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
