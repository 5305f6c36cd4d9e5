"""
Login, current user and permission tests
"""
import pytest

from app.models.orm import Employee, EmployeeRole
from app.security.auth import get_password_hash


class TestLogin:

    def test_login_success(self, client, manager):
        response = client.post("/auth/login", json={"username": "manager", "password": "123456"})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["employee"]["role"] == "MANAGER"

    def test_wrong_password(self, client, manager):
        response = client.post("/auth/login", json={"username": "manager", "password": "nope"})
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post("/auth/login", json={"username": "ghost", "password": "123456"})
        assert response.status_code == 401

    def test_disabled_account(self, client, db_session):
        db_session.add(Employee(username="gone", password_hash=get_password_hash("123456"),
                                name="Former", role=EmployeeRole.ACCOUNTING, is_active=False))
        db_session.commit()
        response = client.post("/auth/login", json={"username": "gone", "password": "123456"})
        assert response.status_code == 401

    def test_token_from_login_is_accepted(self, client, manager):
        token = client.post("/auth/login", json={"username": "manager", "password": "123456"}).json()["access_token"]
        response = client.get("/rate-plans", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200


class TestCurrentUser:

    def test_manager_permissions(self, client, manager_auth_headers):
        response = client.get("/auth/me", headers=manager_auth_headers)
        assert response.status_code == 200
        assert response.json()["permissions"] == ["audit:read", "quote:execute", "rate:read", "rate:write"]

    def test_front_desk_permissions(self, client, front_desk_auth_headers):
        body = client.get("/auth/me", headers=front_desk_auth_headers).json()
        assert body["permissions"] == ["quote:execute", "rate:read"]

    def test_housekeeping_has_none(self, client, housekeeping_auth_headers):
        assert client.get("/auth/me", headers=housekeeping_auth_headers).json()["permissions"] == []

    def test_invalid_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestPermissionChecks:

    @pytest.mark.parametrize("path", ["/rate-plans", "/rate-tiers", "/rate-overrides", "/room-types"])
    def test_housekeeping_cannot_read_rates(self, client, housekeeping_auth_headers, path):
        assert client.get(path, headers=housekeeping_auth_headers).status_code == 403

    def test_front_desk_cannot_read_audit(self, client, front_desk_auth_headers):
        assert client.get("/rate-audits", headers=front_desk_auth_headers).status_code == 403
