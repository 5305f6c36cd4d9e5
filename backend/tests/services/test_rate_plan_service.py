"""
Tests for app/services/rate_plan_service.py
Covers: get_rate_plans, get_rate_plan, create_rate_plan, update_rate_plan,
        delete_rate_plan (soft), classification checks, audit entries
"""
import pytest
from datetime import date

from app.models.orm import (
    AuditAction, AuditEntityType, RateAuditLog, RateCategory, RateClass, RatePlan,
)
from app.models.schemas import RatePlanCreate, RatePlanUpdate
from app.services.exceptions import NotFoundError
from app.services.rate_plan_service import RatePlanService
from rate_engine.models import EntityStatus


def _create(db, manager=None, code="BAR", **kwargs):
    return RatePlanService(db).create_rate_plan(RatePlanCreate(code=code, name=f"{code} plan", **kwargs), manager)


class TestCreateRatePlan:

    def test_defaults(self, db_session, manager):
        plan = _create(db_session, manager)
        assert plan.id is not None
        assert plan.currency == "USD"
        assert plan.status == EntityStatus.ACTIVE
        assert plan.created_by == manager.id

    def test_currency_uppercased(self, db_session):
        assert _create(db_session, currency="eur").currency == "EUR"

    def test_duplicate_code(self, db_session):
        _create(db_session)
        with pytest.raises(ValueError, match="already exists"):
            _create(db_session)

    def test_unknown_rate_type(self, db_session):
        with pytest.raises(ValueError, match="Rate type"):
            _create(db_session, rate_type_id=42)

    def test_class_must_belong_to_category(self, db_session):
        retail = RateCategory(code="RETAIL", name="Retail")
        corporate = RateCategory(code="CORP", name="Corporate")
        db_session.add_all([retail, corporate])
        db_session.flush()
        bar = RateClass(code="BAR", name="BAR", rate_category_id=retail.id)
        db_session.add(bar)
        db_session.commit()

        with pytest.raises(ValueError, match="does not belong"):
            _create(db_session, rate_category_id=corporate.id, rate_class_id=bar.id)

    def test_audit_entry(self, db_session, manager):
        plan = _create(db_session, manager)
        entry = db_session.query(RateAuditLog).one()
        assert entry.entity_type == AuditEntityType.RATE_PLAN
        assert entry.entity_id == plan.id
        assert entry.action == AuditAction.CREATE
        assert entry.user_name == "manager"
        assert '"code": "BAR"' in entry.new_value


class TestListRatePlans:

    def test_pagination(self, db_session):
        for i in range(5):
            _create(db_session, code=f"P{i}")
        page = RatePlanService(db_session).get_rate_plans(page=1, size=2)
        assert page["total_elements"] == 5
        assert page["total_pages"] == 3
        assert [p.code for p in page["content"]] == ["P2", "P3"]

    def test_filters(self, db_session):
        _create(db_session, code="BAR")
        _create(db_session, code="CORP", status=EntityStatus.DRAFT)
        service = RatePlanService(db_session)
        assert service.get_rate_plans(code="ba")["total_elements"] == 1
        assert service.get_rate_plans(status=EntityStatus.DRAFT)["content"][0].code == "CORP"


class TestUpdateAndDelete:

    def test_update(self, db_session, manager):
        plan = _create(db_session, manager)
        updated = RatePlanService(db_session).update_rate_plan(
            plan.id, RatePlanUpdate(name="Renamed", valid_from=date(2025, 1, 1)), manager
        )
        assert updated.name == "Renamed"
        assert updated.code == "BAR"

    def test_update_invalid_window_rolls_back(self, db_session):
        plan = _create(db_session, valid_from=date(2025, 6, 1))
        with pytest.raises(ValueError):
            RatePlanService(db_session).update_rate_plan(plan.id, RatePlanUpdate(valid_to=date(2025, 1, 1)))
        db_session.refresh(plan)
        assert plan.valid_to is None

    def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError):
            RatePlanService(db_session).update_rate_plan(999, RatePlanUpdate(name="x"))

    def test_soft_delete_keeps_row(self, db_session, manager):
        plan = _create(db_session, manager)
        RatePlanService(db_session).delete_rate_plan(plan.id, manager)

        row = db_session.query(RatePlan).filter(RatePlan.id == plan.id).one()
        assert row.status == EntityStatus.INACTIVE
        actions = [e.action for e in db_session.query(RateAuditLog).order_by(RateAuditLog.id)]
        assert actions == [AuditAction.CREATE, AuditAction.DELETE]
