"""
Tests for app/services/room_rate_service.py and rate_audit_service.py
"""
import pytest
from datetime import date
from decimal import Decimal

from app.models.orm import AuditAction, AuditEntityType
from app.models.schemas import RoomRateCreate, RoomRateUpdate
from app.services.rate_audit_service import RateAuditService
from app.services.room_rate_service import RoomRateService


def _publish(db, plan, room_type, on=date(2025, 6, 1), amount="120.00", **kwargs):
    return RoomRateService(db).create_room_rate(RoomRateCreate(
        rate_plan_id=plan.id, room_type_id=room_type.id, rate_date=on,
        rate_amount=Decimal(amount), **kwargs,
    ))


class TestRoomRateService:

    def test_currency_defaults_to_plan(self, db_session, sample_rate_plan, sample_room_type):
        room_rate = _publish(db_session, sample_rate_plan, sample_room_type)
        assert room_rate.currency == "USD"
        assert room_rate.stop_sell is False

    def test_one_rate_per_day(self, db_session, sample_rate_plan, sample_room_type):
        _publish(db_session, sample_rate_plan, sample_room_type)
        with pytest.raises(ValueError, match="already exists"):
            _publish(db_session, sample_rate_plan, sample_room_type, amount="130.00")

    def test_unknown_room_type(self, db_session, sample_rate_plan):
        with pytest.raises(ValueError, match="Room type"):
            RoomRateService(db_session).create_room_rate(RoomRateCreate(
                rate_plan_id=sample_rate_plan.id, room_type_id=404,
                rate_date=date(2025, 6, 1), rate_amount=Decimal("100")))

    def test_date_range(self, db_session, sample_rate_plan, sample_room_type):
        for day in (1, 2, 3):
            _publish(db_session, sample_rate_plan, sample_room_type, on=date(2025, 6, day))
        page = RoomRateService(db_session).get_room_rates(
            start_date=date(2025, 6, 2), end_date=date(2025, 6, 3))
        assert [r.rate_date.day for r in page["content"]] == [2, 3]

    def test_audit_actions(self, db_session, sample_rate_plan, sample_room_type, manager):
        room_rate = _publish(db_session, sample_rate_plan, sample_room_type)
        service = RoomRateService(db_session)
        service.update_room_rate(room_rate.id, RoomRateUpdate(rate_amount=Decimal("125")), manager)
        service.update_room_rate(room_rate.id, RoomRateUpdate(stop_sell=True), manager)

        logs = RateAuditService(db_session).get_logs(
            entity_type=AuditEntityType.ROOM_RATE, entity_id=room_rate.id)
        assert [e.action for e in logs["content"]] == [
            AuditAction.STOP_SELL, AuditAction.RATE_CHANGE, AuditAction.CREATE]
        assert logs["content"][0].user_name == "manager"

    def test_delete(self, db_session, sample_rate_plan, sample_room_type):
        room_rate = _publish(db_session, sample_rate_plan, sample_room_type)
        RoomRateService(db_session).delete_room_rate(room_rate.id)
        assert RoomRateService(db_session).get_room_rates()["total_elements"] == 0
