"""
Tests for app/services/rate_override_service.py and package_component_service.py
"""
import pytest
from datetime import date
from decimal import Decimal

from app.models.orm import AuditAction, RateAuditLog, RatePlan
from app.models.schemas import (
    PackageComponentCreate, PackageComponentUpdate, RateOverrideCreate, RateOverrideUpdate,
)
from app.services.exceptions import NotFoundError
from app.services.package_component_service import PackageComponentService
from app.services.rate_override_service import RateOverrideService
from rate_engine.models import ComponentType, OverrideType


class TestRateOverrideService:

    def _create(self, db, plan, room_type=None, on=date(2025, 12, 31)):
        return RateOverrideService(db).create_override(RateOverrideCreate(
            rate_plan_id=plan.id, room_type_id=room_type.id if room_type else None,
            override_date=on, override_type=OverrideType.FIXED, override_value=Decimal("75"),
        ))

    def test_create_plan_wide(self, db_session, sample_rate_plan):
        override = self._create(db_session, sample_rate_plan)
        assert override.room_type_id is None
        entry = db_session.query(RateAuditLog).one()
        assert entry.action == AuditAction.OVERRIDE_CREATE

    def test_unknown_room_type(self, db_session, sample_rate_plan):
        with pytest.raises(ValueError, match="Room type"):
            RateOverrideService(db_session).create_override(RateOverrideCreate(
                rate_plan_id=sample_rate_plan.id, room_type_id=404, override_date=date(2025, 1, 1),
                override_type=OverrideType.SURCHARGE, override_value=Decimal("10"),
            ))

    def test_date_range_filter(self, db_session, sample_rate_plan, sample_room_type):
        self._create(db_session, sample_rate_plan, on=date(2025, 12, 24))
        self._create(db_session, sample_rate_plan, sample_room_type, on=date(2025, 12, 31))
        service = RateOverrideService(db_session)
        page = service.get_overrides(start_date=date(2025, 12, 25), end_date=date(2025, 12, 31))
        assert page["total_elements"] == 1
        assert service.get_overrides(room_type_id=sample_room_type.id)["total_elements"] == 1

    def test_update_and_delete(self, db_session, sample_rate_plan):
        override = self._create(db_session, sample_rate_plan)
        service = RateOverrideService(db_session)
        updated = service.update_override(override.id, RateOverrideUpdate(override_value=Decimal("80")))
        assert updated.override_value == Decimal("80")

        service.delete_override(override.id)
        with pytest.raises(NotFoundError):
            service.get_override(override.id)
        actions = [e.action for e in db_session.query(RateAuditLog).order_by(RateAuditLog.id)]
        assert actions == [AuditAction.OVERRIDE_CREATE, AuditAction.OVERRIDE_UPDATE, AuditAction.OVERRIDE_DELETE]


class TestPackageComponentService:

    def test_create_marks_plan_as_package(self, db_session, sample_rate_plan):
        component = PackageComponentService(db_session).create_component(PackageComponentCreate(
            rate_plan_id=sample_rate_plan.id, component_type=ComponentType.MEAL,
            component_name="Breakfast", price_adult=Decimal("18"), is_included=True,
        ))
        assert component.is_included is True
        assert db_session.get(RatePlan, sample_rate_plan.id).is_package is True

    def test_filter_by_included(self, db_session, sample_rate_plan):
        service = PackageComponentService(db_session)
        for included in (True, False, False):
            service.create_component(PackageComponentCreate(
                rate_plan_id=sample_rate_plan.id, component_type=ComponentType.SERVICE,
                component_name="Item", unit_price=Decimal("10"), is_included=included,
            ))
        assert service.get_components(is_included=False)["total_elements"] == 2

    def test_update_audited_as_package_update(self, db_session, sample_rate_plan):
        service = PackageComponentService(db_session)
        component = service.create_component(PackageComponentCreate(
            rate_plan_id=sample_rate_plan.id, component_type=ComponentType.SERVICE,
            component_name="Parking", unit_price=Decimal("15"),
        ))
        service.update_component(component.id, PackageComponentUpdate(quantity=2))
        last = db_session.query(RateAuditLog).order_by(RateAuditLog.id.desc()).first()
        assert last.action == AuditAction.PACKAGE_UPDATE

    def test_unknown_plan(self, db_session):
        with pytest.raises(ValueError):
            PackageComponentService(db_session).create_component(PackageComponentCreate(
                rate_plan_id=5, component_type=ComponentType.OTHER, component_name="x",
            ))
