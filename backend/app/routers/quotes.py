"""
Quote routes
Nightly, stay and preview quotes plus the rate matrix.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.orm import Employee
from app.models.schemas import (
    NightlyQuoteRequest, NightlyQuoteResponse,
    StayQuoteRequest, StayQuoteResponse,
    QuotePreviewRequest,
    RateMatrixRequest, RateMatrixResponse,
)
from app.services.exceptions import NegativeRateRejected, NotFoundError
from app.services.quote_service import QuoteService
from app.security.auth import require_permission
from app.security.permissions import QUOTE_EXECUTE, RATE_READ
from rate_engine.errors import (
    ConfigurationError, InvalidQuoteRequest, RatePlanNotFound, RatePlanUnavailable,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["Quotes"])
matrix_router = APIRouter(prefix="/rate-matrix", tags=["Quotes"])


def quote_http_error(e: Exception) -> HTTPException:
    """Map a pricing failure onto an HTTP error"""
    if isinstance(e, NegativeRateRejected):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if isinstance(e, RatePlanNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, RatePlanUnavailable):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, ConfigurationError):
        logger.error(f"Rate configuration error: {e}")
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if isinstance(e, InvalidQuoteRequest):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, (NotFoundError, LookupError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


QUOTE_ERRORS = (NegativeRateRejected, ConfigurationError, RatePlanUnavailable, LookupError, ValueError)


@router.post("/nightly", response_model=NightlyQuoteResponse)
def quote_nightly(
    data: NightlyQuoteRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(QUOTE_EXECUTE))
):
    """Quote one night of a stay"""
    service = QuoteService(db)
    try:
        return service.quote_nightly(data.rate_plan_id, data.room_type_id, data.date, data.nights, data.guests)
    except QUOTE_ERRORS as e:
        raise quote_http_error(e)


@router.post("/stay", response_model=StayQuoteResponse)
def quote_stay(
    data: StayQuoteRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(QUOTE_EXECUTE))
):
    """Quote every night of a stay"""
    service = QuoteService(db)
    try:
        return service.quote_stay(data.rate_plan_id, data.room_type_id,
                                  data.check_in_date, data.check_out_date, data.guests)
    except QUOTE_ERRORS as e:
        raise quote_http_error(e)


@router.post("/preview", response_model=NightlyQuoteResponse)
def quote_preview(
    data: QuotePreviewRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(QUOTE_EXECUTE))
):
    """Price an unsaved tier/override/component configuration"""
    service = QuoteService(db)
    try:
        return service.preview(data)
    except QUOTE_ERRORS as e:
        raise quote_http_error(e)


@matrix_router.post("", response_model=RateMatrixResponse)
def rate_matrix(
    data: RateMatrixRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_permission(RATE_READ))
):
    """Daily quotes over a date range for several room types and rate plans"""
    service = QuoteService(db)
    try:
        return service.rate_matrix(data)
    except QUOTE_ERRORS as e:
        raise quote_http_error(e)
