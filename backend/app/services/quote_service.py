"""
Quote service
Runs rate_engine quotes against the database and applies the configured
negative-rate policy.
"""
import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.models.orm import RatePlan, RoomType
from app.models.schemas import (
    GuestCountsIn, QuotePreviewRequest, RateMatrixRequest,
)
from app.services.exceptions import NegativeRateRejected, NotFoundError
from app.services.rate_repository import SqlAlchemyRateRepository, StopSellError
from rate_engine import models as core
from rate_engine.errors import ConfigurationError, RatePlanNotFound, RatePlanUnavailable
from rate_engine.money import ZERO, round_money
from rate_engine.quote import NightlyQuote, StayQuote, price_night, quote_nightly_rate, quote_stay

logger = logging.getLogger(__name__)

def to_guest_counts(guests: Optional[GuestCountsIn]) -> core.GuestCounts:
    if guests is None:
        return core.GuestCounts()
    return core.GuestCounts(adults=guests.adults, children=guests.children, infants=guests.infants)


def _stay_to_dict(stay: StayQuote, nightly: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "rate_plan_id": stay.rate_plan_id,
        "room_type_id": stay.room_type_id,
        "check_in_date": stay.check_in,
        "check_out_date": stay.check_out,
        "nights": stay.nights,
        "currency": stay.currency,
        "room_total": stay.room_total,
        "extras_total": stay.extras_total,
        "total": stay.total,
        "nightly": nightly,
        "warnings": [w.to_dict() for w in stay.warnings],
    }


class QuoteService:
    """Nightly, stay and preview quotes plus the rate matrix"""

    def __init__(self, db: Session, policy: Optional[str] = None):
        self.db = db
        self.repository = SqlAlchemyRateRepository(db)
        self.policy = policy or settings.NEGATIVE_RATE_POLICY

    def _apply_policy(self, quote: NightlyQuote) -> Dict[str, Any]:
        """
        Render a nightly quote under the negative-rate policy.

        Raises:
            NegativeRateRejected: policy is ``reject`` and the quote went negative.
        """
        if quote.has_negative_rate and self.policy == "reject":
            raise NegativeRateRejected(quote.warnings)

        result = quote.to_dict()
        if quote.has_negative_rate and self.policy == "clamp":
            final_rate = max(result["final_rate"], ZERO)
            result["final_rate"] = round_money(final_rate)
            # nightly_total stays final_rate + extras_total
            result["nightly_total"] = round_money(max(final_rate + result["extras_total"], ZERO))
        return result

    def quote_nightly(self, rate_plan_id: int, room_type_id: int, on_date: date,
                      nights: int, guests: Optional[GuestCountsIn] = None) -> Dict[str, Any]:
        quote = quote_nightly_rate(
            self.repository, rate_plan_id, room_type_id, on_date, nights, to_guest_counts(guests)
        )
        logger.info(f"Quoted plan {rate_plan_id} room type {room_type_id} on {on_date}: "
                    f"{quote.nightly_total} {quote.currency}")
        return self._apply_policy(quote)

    def quote_stay(self, rate_plan_id: int, room_type_id: int, check_in: date,
                   check_out: date, guests: Optional[GuestCountsIn] = None) -> Dict[str, Any]:
        stay = quote_stay(
            self.repository, rate_plan_id, room_type_id, check_in, check_out, to_guest_counts(guests)
        )
        nightly = [self._apply_policy(q) for q in stay.nightly]
        result = _stay_to_dict(stay, nightly)
        if stay.has_negative_rate and self.policy == "clamp":
            result["room_total"] = round_money(sum((n["final_rate"] for n in nightly), ZERO))
            result["total"] = round_money(sum((n["nightly_total"] for n in nightly), ZERO))
        logger.info(f"Quoted stay plan {rate_plan_id} room type {room_type_id} "
                    f"{check_in}..{check_out}: {result['total']} {stay.currency}")
        return result

    def preview(self, request: QuotePreviewRequest) -> Dict[str, Any]:
        """Price an unsaved configuration; unset ids are numbered by position"""
        tiers = [
            core.RateTier(
                id=t.id or i, rate_plan_id=0, min_nights=t.min_nights, max_nights=t.max_nights,
                adjustment_type=t.adjustment_type, adjustment_value=t.adjustment_value,
                priority=t.priority,
            )
            for i, t in enumerate(request.tiers, start=1)
        ]
        overrides = [
            core.RateOverride(
                id=o.id or i, rate_plan_id=0, room_type_id=o.room_type_id,
                override_date=o.override_date, override_type=o.override_type,
                override_value=o.override_value,
            )
            for i, o in enumerate(request.overrides, start=1)
        ]
        components = [
            core.RatePackageComponent(
                id=c.id or i, rate_plan_id=0, component_type=c.component_type,
                component_name=c.component_name, quantity=c.quantity, unit_price=c.unit_price,
                price_adult=c.price_adult, price_child=c.price_child, price_infant=c.price_infant,
                is_included=c.is_included,
            )
            for i, c in enumerate(request.components, start=1)
        ]
        quote = price_night(
            base_rate=request.base_rate,
            tiers=tiers,
            overrides=overrides,
            components=components,
            room_type_id=request.room_type_id,
            on_date=request.date,
            nights=request.nights,
            guest_counts=to_guest_counts(request.guests),
        )
        return self._apply_policy(quote)

    def rate_matrix(self, request: RateMatrixRequest) -> Dict[str, Any]:
        """
        Quote every (date, rate plan, room type) cell of a range.

        Cells that cannot be priced carry an error message instead of
        failing the whole matrix. Cells follow the negative-rate policy;
        under ``reject`` a negative cell carries the rejection as its error.

        Raises:
            NotFoundError: Unknown rate plan or room type id.
        """
        for plan_id in request.rate_plan_ids:
            if not self.db.get(RatePlan, plan_id):
                raise NotFoundError("Rate plan", plan_id)
        for room_type_id in request.room_type_ids:
            if not self.db.get(RoomType, room_type_id):
                raise NotFoundError("Room type", room_type_id)

        guests = to_guest_counts(request.guests)
        days = (request.end_date - request.start_date).days + 1
        cells = []
        rates: List[Decimal] = []

        for offset in range(days):
            on_date = request.start_date + timedelta(days=offset)
            for plan_id in request.rate_plan_ids:
                for room_type_id in request.room_type_ids:
                    cell = {"date": on_date, "rate_plan_id": plan_id, "room_type_id": room_type_id}
                    try:
                        quote = quote_nightly_rate(
                            self.repository, plan_id, room_type_id, on_date,
                            request.length_of_stay, guests,
                        )
                    except StopSellError as e:
                        cell.update(stop_sell=True, error=str(e))
                    except (RatePlanNotFound, RatePlanUnavailable, ConfigurationError, LookupError) as e:
                        cell["error"] = str(e)
                    else:
                        try:
                            priced = self._apply_policy(quote)
                        except NegativeRateRejected as e:
                            cell["error"] = str(e)
                        else:
                            cell.update(
                                base_rate=priced["base_rate"],
                                final_rate=priced["final_rate"],
                                nightly_total=priced["nightly_total"],
                                applied_tier_id=priced["applied_tier_id"],
                                applied_override_id=priced["applied_override_id"],
                            )
                            rates.append(priced["final_rate"])
                    cells.append(cell)

        summary = {
            "total_room_types": len(request.room_type_ids),
            "total_rate_plans": len(request.rate_plan_ids),
            "total_days": days,
            "min_rate": min(rates) if rates else None,
            "max_rate": max(rates) if rates else None,
            "average_rate": round_money(sum(rates, ZERO) / len(rates)) if rates else None,
        }
        return {
            "start_date": request.start_date,
            "end_date": request.end_date,
            "cells": cells,
            "summary": summary,
        }
