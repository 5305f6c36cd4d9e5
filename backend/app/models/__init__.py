# ORM Models
from app.models.orm import (
    Employee, RoomType, RateCategory, RateClass, RateType,
    RatePlan, RateTier, RateOverride, RatePackageComponent, RoomRate, RateAuditLog
)

__all__ = [
    'Employee', 'RoomType', 'RateCategory', 'RateClass', 'RateType',
    'RatePlan', 'RateTier', 'RateOverride', 'RatePackageComponent', 'RoomRate', 'RateAuditLog'
]
