"""
Pytest configuration and shared fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.database import Base, build_engine, get_db, init_db
from app.models import orm  # noqa
from app.models.orm import Employee, EmployeeRole, RoomType, RatePlan
from app.security.auth import get_password_hash, create_access_token
from app.main import app
from rate_engine.models import EntityStatus


@pytest.fixture(scope="function")
def db_engine():
    """In-memory database engine"""
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Database session"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Test client bound to the test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== Auth fixtures ==============

def _make_employee(db_session, username, role, name):
    employee = Employee(
        username=username,
        password_hash=get_password_hash("123456"),
        name=name,
        role=role,
        is_active=True
    )
    db_session.add(employee)
    db_session.commit()
    db_session.refresh(employee)
    return employee


@pytest.fixture
def manager(db_session):
    return _make_employee(db_session, "manager", EmployeeRole.MANAGER, "Revenue Manager")


@pytest.fixture
def manager_token(manager):
    """Token of a MANAGER account"""
    return create_access_token(manager.id, manager.role)


@pytest.fixture
def front_desk_token(db_session):
    """Token of a FRONT_DESK account"""
    front = _make_employee(db_session, "front1", EmployeeRole.FRONT_DESK, "Front Desk")
    return create_access_token(front.id, front.role)


@pytest.fixture
def housekeeping_token(db_session):
    """Token of a HOUSEKEEPING account"""
    cleaner = _make_employee(db_session, "cleaner1", EmployeeRole.HOUSEKEEPING, "Housekeeping")
    return create_access_token(cleaner.id, cleaner.role)


@pytest.fixture
def manager_auth_headers(manager_token):
    return {"Authorization": f"Bearer {manager_token}"}


@pytest.fixture
def front_desk_auth_headers(front_desk_token):
    return {"Authorization": f"Bearer {front_desk_token}"}


@pytest.fixture
def housekeeping_auth_headers(housekeeping_token):
    return {"Authorization": f"Bearer {housekeeping_token}"}


# ============== Entity fixtures ==============

@pytest.fixture
def sample_room_type(db_session):
    """Room type with a 100.00 base price"""
    room_type = RoomType(
        code="STD",
        name="Standard",
        description="Standard Room",
        base_price=Decimal("100.00"),
        max_occupancy=2
    )
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_room_type_deluxe(db_session):
    room_type = RoomType(
        code="DLX",
        name="Deluxe",
        base_price=Decimal("200.00"),
        max_occupancy=3
    )
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_rate_plan(db_session):
    """Active USD rate plan"""
    plan = RatePlan(code="BAR", name="Best Available Rate", currency="USD", status=EntityStatus.ACTIVE)
    db_session.add(plan)
    db_session.commit()
    db_session.refresh(plan)
    return plan


@pytest.fixture
def quote_date():
    return date(2025, 6, 1)
