"""
Room type routes
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee
from app.models.schemas import Page, RoomTypeCreate, RoomTypeUpdate, RoomTypeResponse
from app.services.exceptions import NotFoundError
from app.services.room_type_service import RoomTypeService
from app.security.auth import require_permission
from app.security.permissions import RATE_READ, RATE_WRITE
from rate_engine.models import EntityStatus

router = APIRouter(prefix="/room-types", tags=["Room types"])


@router.get("", response_model=Page[RoomTypeResponse])
def list_room_types(
    status_filter: Optional[EntityStatus] = Query(None, alias="status"),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """List room types"""
    service = RoomTypeService(db)
    result = service.get_room_types(status_filter, page, size)
    result["content"] = [RoomTypeResponse.model_validate(r) for r in result["content"]]
    return result


@router.get("/{room_type_id}", response_model=RoomTypeResponse)
def get_room_type(
    room_type_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """Room type detail"""
    service = RoomTypeService(db)
    try:
        return service.get_room_type(room_type_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=RoomTypeResponse, status_code=status.HTTP_201_CREATED)
def create_room_type(
    data: RoomTypeCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Create a room type"""
    service = RoomTypeService(db)
    try:
        return service.create_room_type(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{room_type_id}", response_model=RoomTypeResponse)
def update_room_type(
    room_type_id: int,
    data: RoomTypeUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_WRITE))
):
    """Update a room type"""
    service = RoomTypeService(db)
    try:
        return service.update_room_type(room_type_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
