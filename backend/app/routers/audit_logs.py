"""
Rate audit routes
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee, AuditAction, AuditEntityType
from app.models.schemas import Page, RateAuditResponse
from app.services.rate_audit_service import RateAuditService
from app.security.auth import require_permission
from app.security.permissions import AUDIT_READ

router = APIRouter(prefix="/rate-audits", tags=["Rate audit"])


@router.get("", response_model=Page[RateAuditResponse])
def list_audit_logs(
    entity_type: Optional[AuditEntityType] = None,
    entity_id: Optional[int] = None,
    action: Optional[AuditAction] = None,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(AUDIT_READ))
):
    """Rate change history, newest first"""
    service = RateAuditService(db)
    result = service.get_logs(entity_type, entity_id, action, page, size)
    result["content"] = [RateAuditResponse.model_validate(r) for r in result["content"]]
    return result
