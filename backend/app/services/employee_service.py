"""
Employee service - staff login
"""
from typing import Optional
from sqlalchemy.orm import Session
from app.models.orm import Employee
from app.security.auth import verify_password, create_access_token


class EmployeeService:
    """Staff accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.id == employee_id).first()

    def get_employee_by_username(self, username: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.username == username).first()

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        """Check credentials and issue a token; None when they do not match"""
        employee = self.get_employee_by_username(username)
        if not employee:
            return None

        if not employee.is_active:
            raise ValueError("Account disabled")

        if not verify_password(password, employee.password_hash):
            return None

        token = create_access_token(employee.id, employee.role)

        return {
            'access_token': token,
            'token_type': 'bearer',
            'employee': employee
        }
