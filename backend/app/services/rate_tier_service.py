"""
Rate tier service
Length-of-stay tiers; overlapping ranges are accepted but logged.
"""
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from app.models.orm import AuditAction, AuditEntityType, Employee, RatePlan, RateTier
from app.models.schemas import RateTierCreate, RateTierUpdate, TierPriorityUpdate
from app.services.exceptions import NotFoundError, reject_nulls
from app.services.pagination import paginate
from app.services.rate_audit_service import RateAuditService, snapshot
from app.services.rate_repository import to_core_tier
from rate_engine.errors import ConfigurationError
from rate_engine.models import AdjustmentType, EntityStatus
from rate_engine.tiers import find_overlaps

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("min_nights", "adjustment_type", "adjustment_value", "priority", "status")


def _label(tier: RateTier) -> str:
    upper = tier.max_nights if tier.max_nights is not None else "+"
    return f"{tier.rate_plan_id}:{tier.min_nights}-{upper}"


class RateTierService:
    """Rate tiers"""

    def __init__(self, db: Session):
        self.db = db
        self.audit = RateAuditService(db)

    def get_tiers(self, rate_plan_id: Optional[int] = None,
                  adjustment_type: Optional[AdjustmentType] = None,
                  status: Optional[EntityStatus] = None,
                  page: int = 0, size: Optional[int] = None) -> Dict[str, Any]:
        """Tiers in evaluation order within each plan"""
        query = self.db.query(RateTier)
        if rate_plan_id:
            query = query.filter(RateTier.rate_plan_id == rate_plan_id)
        if adjustment_type:
            query = query.filter(RateTier.adjustment_type == adjustment_type)
        if status:
            query = query.filter(RateTier.status == status)
        query = query.order_by(RateTier.rate_plan_id, RateTier.priority, RateTier.min_nights, RateTier.id)
        return paginate(query, page, size)

    def get_tier(self, tier_id: int) -> RateTier:
        tier = self.db.query(RateTier).filter(RateTier.id == tier_id).first()
        if not tier:
            raise NotFoundError("Rate tier", tier_id)
        return tier

    def _validate(self, tier: RateTier):
        try:
            to_core_tier(tier).validate()
        except ConfigurationError as e:
            raise ValueError(str(e))

    def _warn_overlaps(self, rate_plan_id: int):
        rows = self.db.query(RateTier).filter(RateTier.rate_plan_id == rate_plan_id).all()
        for a, b in find_overlaps([to_core_tier(r) for r in rows]):
            logger.warning(
                "Rate plan %s: tiers %s (%s-%s) and %s (%s-%s) overlap; priority %s vs %s decides",
                rate_plan_id, a.id, a.min_nights, a.max_nights, b.id, b.min_nights, b.max_nights,
                a.priority, b.priority,
            )

    def create_tier(self, data: RateTierCreate, user: Optional[Employee] = None) -> RateTier:
        if not self.db.get(RatePlan, data.rate_plan_id):
            raise ValueError(f"Rate plan {data.rate_plan_id} does not exist")

        tier = RateTier(**data.model_dump())
        self._validate(tier)

        self.db.add(tier)
        self.db.flush()
        self.audit.record(AuditEntityType.RATE_TIER, tier.id, AuditAction.CREATE, user,
                          entity_name=_label(tier), new=snapshot(tier))
        self.db.commit()
        self.db.refresh(tier)
        logger.info(f"Created rate tier {_label(tier)}")
        self._warn_overlaps(tier.rate_plan_id)
        return tier

    def update_tier(self, tier_id: int, data: RateTierUpdate,
                    user: Optional[Employee] = None) -> RateTier:
        tier = self.get_tier(tier_id)
        previous = snapshot(tier)

        update_data = data.model_dump(exclude_unset=True)
        reject_nulls(update_data, REQUIRED_FIELDS)

        for key, value in update_data.items():
            setattr(tier, key, value)

        try:
            self._validate(tier)
        except ValueError:
            self.db.rollback()
            raise

        self.audit.record(AuditEntityType.RATE_TIER, tier.id, AuditAction.TIER_UPDATE, user,
                          entity_name=_label(tier), previous=previous, new=snapshot(tier))
        self.db.commit()
        self.db.refresh(tier)
        logger.info(f"Updated rate tier {_label(tier)}")
        self._warn_overlaps(tier.rate_plan_id)
        return tier

    def delete_tier(self, tier_id: int, user: Optional[Employee] = None) -> bool:
        tier = self.get_tier(tier_id)
        self.audit.record(AuditEntityType.RATE_TIER, tier.id, AuditAction.DELETE, user,
                          entity_name=_label(tier), previous=snapshot(tier))
        self.db.delete(tier)
        self.db.commit()
        logger.info(f"Deleted rate tier {tier_id}")
        return True

    def update_priorities(self, items: List[TierPriorityUpdate],
                          user: Optional[Employee] = None) -> List[RateTier]:
        """
        Reorder tiers in one transaction.

        Either every listed tier gets its new priority or none does.

        Raises:
            ValueError: Empty or duplicated ids.
            NotFoundError: Any id is unknown.
        """
        if not items:
            raise ValueError("No tiers to update")
        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            raise ValueError("Duplicate tier ids in priority update")

        tiers = {t.id: t for t in self.db.query(RateTier).filter(RateTier.id.in_(ids)).all()}
        missing = [i for i in ids if i not in tiers]
        if missing:
            raise NotFoundError("Rate tier", missing[0])

        try:
            for item in items:
                tier = tiers[item.id]
                previous = snapshot(tier)
                tier.priority = item.priority
                self.audit.record(AuditEntityType.RATE_TIER, tier.id, AuditAction.BULK_UPDATE, user,
                                  entity_name=_label(tier), previous=previous, new=snapshot(tier))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Reprioritised {len(items)} rate tiers")
        result = [tiers[i] for i in ids]
        for tier in result:
            self.db.refresh(tier)
        return result
