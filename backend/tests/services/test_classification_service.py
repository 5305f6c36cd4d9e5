"""
Tests for app/services/classification_service.py
"""
import pytest

from app.models.orm import AuditAction, RateAuditLog, RatePlan
from app.models.schemas import (
    ClassificationUpdate, RateCategoryCreate, RateClassCreate, RateTypeCreate,
)
from app.services.classification_service import (
    RateCategoryService, RateClassService, RateTypeService,
)
from app.services.exceptions import NotFoundError


@pytest.fixture
def retail(db_session):
    return RateCategoryService(db_session).create(RateCategoryCreate(code="RETAIL", name="Retail"))


class TestRateCategoryService:

    def test_create_and_list(self, db_session, retail):
        RateCategoryService(db_session).create(RateCategoryCreate(code="CORP", name="Corporate"))
        page = RateCategoryService(db_session).list()
        assert [c.code for c in page["content"]] == ["CORP", "RETAIL"]

    def test_duplicate_code(self, db_session, retail):
        with pytest.raises(ValueError, match="already exists"):
            RateCategoryService(db_session).create(RateCategoryCreate(code="RETAIL", name="Again"))

    def test_update(self, db_session, retail):
        updated = RateCategoryService(db_session).update(retail.id, ClassificationUpdate(name="Retail rates"))
        assert updated.name == "Retail rates"
        assert db_session.query(RateAuditLog).filter(
            RateAuditLog.action == AuditAction.UPDATE).count() == 1

    def test_delete_referenced_category(self, db_session, retail):
        RateClassService(db_session).create(RateClassCreate(code="BAR", name="BAR", rate_category_id=retail.id))
        with pytest.raises(ValueError, match="still referenced"):
            RateCategoryService(db_session).delete(retail.id)

    def test_delete_unused(self, db_session, retail):
        assert RateCategoryService(db_session).delete(retail.id) is True
        with pytest.raises(NotFoundError):
            RateCategoryService(db_session).get(retail.id)


class TestRateClassService:

    def test_unknown_category(self, db_session):
        with pytest.raises(ValueError, match="Rate category"):
            RateClassService(db_session).create(RateClassCreate(code="BAR", name="BAR", rate_category_id=77))

    def test_delete_referenced_by_plan(self, db_session, retail):
        rate_class = RateClassService(db_session).create(
            RateClassCreate(code="BAR", name="BAR", rate_category_id=retail.id))
        db_session.add(RatePlan(code="BAR", name="Best available", currency="USD",
                                rate_category_id=retail.id, rate_class_id=rate_class.id))
        db_session.commit()
        with pytest.raises(ValueError, match="1 rate plans"):
            RateClassService(db_session).delete(rate_class.id)


class TestRateTypeService:

    def test_filter_by_code(self, db_session):
        service = RateTypeService(db_session)
        service.create(RateTypeCreate(code="FLEX", name="Flexible"))
        service.create(RateTypeCreate(code="NRF", name="Non refundable"))
        assert service.list(code="fl")["total_elements"] == 1
