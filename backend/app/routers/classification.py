"""
Rate classification routes: categories, classes and types
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee, RateClass
from app.models.schemas import (
    Page, ClassificationUpdate,
    RateCategoryCreate, RateCategoryResponse,
    RateClassCreate, RateClassUpdate, RateClassResponse,
    RateTypeCreate, RateTypeResponse,
)
from app.services.classification_service import (
    RateCategoryService, RateClassService, RateTypeService,
)
from app.services.exceptions import NotFoundError
from app.security.auth import require_permission
from app.security.permissions import RATE_READ, RATE_WRITE
from rate_engine.models import EntityStatus

category_router = APIRouter(prefix="/rate-categories", tags=["Rate classification"])
class_router = APIRouter(prefix="/rate-classes", tags=["Rate classification"])
type_router = APIRouter(prefix="/rate-types", tags=["Rate classification"])


def class_response(row: RateClass) -> RateClassResponse:
    return RateClassResponse(
        id=row.id,
        rate_category_id=row.rate_category_id,
        rate_category_code=row.rate_category.code if row.rate_category else None,
        rate_category_name=row.rate_category.name if row.rate_category else None,
        code=row.code,
        name=row.name,
        description=row.description,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at
    )


def _register(router: APIRouter, service_cls, create_schema, update_schema, to_response, response_model):
    """Attach list/get/create/update/delete routes for one taxonomy table"""

    @router.get("", response_model=Page[response_model])
    def list_rows(
        code: Optional[str] = None,
        name: Optional[str] = None,
        status_filter: Optional[EntityStatus] = Query(None, alias="status"),
        page: int = Query(0, ge=0),
        size: Optional[int] = Query(None, ge=1),
        db: Session = Depends(get_db),
        current_user: Employee = Depends(require_permission(RATE_READ))
    ):
        result = service_cls(db).list(code, name, status_filter, page, size)
        result["content"] = [to_response(r) for r in result["content"]]
        return result

    @router.get("/{row_id}", response_model=response_model)
    def get_row(
        row_id: int,
        db: Session = Depends(get_db),
        current_user: Employee = Depends(require_permission(RATE_READ))
    ):
        try:
            return to_response(service_cls(db).get(row_id))
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    @router.post("", response_model=response_model, status_code=status.HTTP_201_CREATED)
    def create_row(
        data: create_schema,
        db: Session = Depends(get_db),
        current_user: Employee = Depends(require_permission(RATE_WRITE))
    ):
        try:
            return to_response(service_cls(db).create(data, current_user))
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    @router.put("/{row_id}", response_model=response_model)
    def update_row(
        row_id: int,
        data: update_schema,
        db: Session = Depends(get_db),
        current_user: Employee = Depends(require_permission(RATE_WRITE))
    ):
        try:
            return to_response(service_cls(db).update(row_id, data, current_user))
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    @router.delete("/{row_id}")
    def delete_row(
        row_id: int,
        db: Session = Depends(get_db),
        current_user: Employee = Depends(require_permission(RATE_WRITE))
    ):
        try:
            service_cls(db).delete(row_id, current_user)
            return {"message": "Deleted"}
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


_register(category_router, RateCategoryService, RateCategoryCreate, ClassificationUpdate,
          RateCategoryResponse.model_validate, RateCategoryResponse)
_register(class_router, RateClassService, RateClassCreate, RateClassUpdate,
          class_response, RateClassResponse)
_register(type_router, RateTypeService, RateTypeCreate, ClassificationUpdate,
          RateTypeResponse.model_validate, RateTypeResponse)
