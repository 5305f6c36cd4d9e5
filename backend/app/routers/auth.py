"""
Authentication routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.schemas import LoginRequest, LoginResponse, EmployeeResponse
from app.models.orm import Employee
from app.services.employee_service import EmployeeService
from app.security.auth import get_current_user
from app.security.permissions import permissions_for

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Staff login"""
    service = EmployeeService(db)
    try:
        result = service.authenticate(data.username, data.password)
        if not result:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username or password"
            )
        return result
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


@router.get("/me")
def get_current_user_info(current_user: Employee = Depends(get_current_user)):
    """Current user and the permissions of their role"""
    info = EmployeeResponse.model_validate(current_user).model_dump()
    info["permissions"] = sorted(permissions_for(current_user.role))
    return info
