"""
rate_engine/overrides.py

Override resolver: dated overrides are the final word on a night's rate.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from rate_engine.models import OverrideType, RateOverride
from rate_engine.money import HUNDRED, to_decimal

logger = logging.getLogger(__name__)


def _override_rank(override: RateOverride):
    # room-specific first, then newest id
    return (1 if override.is_room_specific else 0, override.id)


def resolve_override(
    overrides: Iterable[RateOverride],
    room_type_id: Optional[int],
    on_date: date,
) -> Optional[RateOverride]:
    """
    Select the override that applies to ``on_date`` for ``room_type_id``.

    An override matches when it is active, dated ``on_date``, and either
    plan-wide or scoped to the requested room type. A room-type-specific
    match outranks a plan-wide one; remaining ties go to the highest id.

    Args:
        overrides: Candidate overrides (may be empty).
        room_type_id: Room type being quoted, or None for plan-wide only.
        on_date: Night being quoted.

    Returns:
        The winning override, or None.
    """
    best = None
    for override in overrides:
        override.validate()
        if not override.is_active:
            continue
        if override.override_date != on_date:
            continue
        if override.room_type_id is not None and override.room_type_id != room_type_id:
            continue
        if best is None or _override_rank(override) > _override_rank(best):
            best = override

    if best is not None:
        logger.debug("Override %s applies on %s for room type %s", best.id, on_date, room_type_id)
    return best


def apply_override(base_rate, override: RateOverride) -> Decimal:
    """
    Compute the night's rate from an override.

    The override replaces the tier-adjusted rate: relative types are applied
    to the base rate, not composed with the tier result.
    """
    base = to_decimal(base_rate, "base_rate")
    value = override.override_value

    if override.override_type == OverrideType.FIXED:
        return value
    if override.override_type == OverrideType.SURCHARGE:
        return base + value
    if override.override_type == OverrideType.DISCOUNT:
        return base - value
    # PERCENTAGE
    return base * (1 + value / HUNDRED)


__all__ = ["resolve_override", "apply_override"]
