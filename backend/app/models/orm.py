"""
ORM object definitions
Rate plans, their tiers, overrides and package components, the rate
classification taxonomy, room types and the staff accounts that edit them.
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, Date,
    ForeignKey, Text, Enum as SQLEnum, Boolean, Numeric, UniqueConstraint
)
from sqlalchemy.orm import relationship
from app.database import Base
from rate_engine.models import AdjustmentType, ComponentType, EntityStatus, OverrideType


# ============== Enums ==============

class EmployeeRole(str, Enum):
    """Staff roles"""
    DIRECTOR = "DIRECTOR"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    FRONT_DESK = "FRONT_DESK"
    ACCOUNTING = "ACCOUNTING"
    HOUSEKEEPING = "HOUSEKEEPING"


class AuditAction(str, Enum):
    """Rate audit actions"""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    BULK_UPDATE = "BULK_UPDATE"
    OVERRIDE_CREATE = "OVERRIDE_CREATE"
    OVERRIDE_UPDATE = "OVERRIDE_UPDATE"
    OVERRIDE_DELETE = "OVERRIDE_DELETE"
    STOP_SELL = "STOP_SELL"
    RATE_CHANGE = "RATE_CHANGE"
    TIER_UPDATE = "TIER_UPDATE"
    PACKAGE_UPDATE = "PACKAGE_UPDATE"


class AuditEntityType(str, Enum):
    """Audited entity types"""
    ROOM_RATE = "ROOM_RATE"
    RATE_PLAN = "RATE_PLAN"
    RATE_OVERRIDE = "RATE_OVERRIDE"
    RATE_TIER = "RATE_TIER"
    RATE_PACKAGE_COMPONENT = "RATE_PACKAGE_COMPONENT"
    RATE_CATEGORY = "RATE_CATEGORY"
    RATE_CLASS = "RATE_CLASS"
    RATE_TYPE = "RATE_TYPE"


# ============== Staff ==============

class Employee(Base):
    """Staff account"""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)
    email = Column(String(120))
    role = Column(SQLEnum(EmployeeRole), nullable=False, default=EmployeeRole.FRONT_DESK)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ============== Inventory ==============

class RoomType(Base):
    """
    Room type
    base_price is the default nightly base rate when no RoomRate is published.
    """
    __tablename__ = "room_types"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), unique=True, nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(Text)
    base_price = Column(Numeric(10, 2), nullable=False)
    max_occupancy = Column(Integer, default=2)
    status = Column(SQLEnum(EntityStatus), default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    room_rates = relationship("RoomRate", back_populates="room_type")
    rate_overrides = relationship("RateOverride", back_populates="room_type")


# ============== Rate classification ==============

class RateCategory(Base):
    """Top level of the rate classification taxonomy"""
    __tablename__ = "rate_categories"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(40), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    status = Column(SQLEnum(EntityStatus), default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rate_classes = relationship("RateClass", back_populates="rate_category")


class RateClass(Base):
    """Second level of the taxonomy, owned by one RateCategory"""
    __tablename__ = "rate_classes"

    id = Column(Integer, primary_key=True, index=True)
    rate_category_id = Column(Integer, ForeignKey("rate_categories.id"), nullable=False)
    code = Column(String(40), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    status = Column(SQLEnum(EntityStatus), default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rate_category = relationship("RateCategory", back_populates="rate_classes")


class RateType(Base):
    """Flat tag dimension for rate plans"""
    __tablename__ = "rate_types"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(40), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    status = Column(SQLEnum(EntityStatus), default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ============== Rates ==============

class RatePlan(Base):
    """
    Sellable rate
    Soft-deleted through status; rows are never removed.
    """
    __tablename__ = "rate_plans"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(40), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    currency = Column(String(3), nullable=False, default="USD")
    status = Column(SQLEnum(EntityStatus), nullable=False, default=EntityStatus.ACTIVE)
    is_package = Column(Boolean, default=False)
    valid_from = Column(Date)
    valid_to = Column(Date)
    rate_type_id = Column(Integer, ForeignKey("rate_types.id"))
    rate_category_id = Column(Integer, ForeignKey("rate_categories.id"))
    rate_class_id = Column(Integer, ForeignKey("rate_classes.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    created_by = Column(Integer, ForeignKey("employees.id"))

    rate_type = relationship("RateType")
    rate_category = relationship("RateCategory")
    rate_class = relationship("RateClass")
    tiers = relationship("RateTier", back_populates="rate_plan")
    overrides = relationship("RateOverride", back_populates="rate_plan")
    package_components = relationship("RatePackageComponent", back_populates="rate_plan")
    room_rates = relationship("RoomRate", back_populates="rate_plan")


class RateTier(Base):
    """Length-of-stay adjustment (lower priority is evaluated first)"""
    __tablename__ = "rate_tiers"

    id = Column(Integer, primary_key=True, index=True)
    rate_plan_id = Column(Integer, ForeignKey("rate_plans.id"), nullable=False, index=True)
    min_nights = Column(Integer, nullable=False, default=1)
    max_nights = Column(Integer)                                  # NULL = unbounded
    adjustment_type = Column(SQLEnum(AdjustmentType), nullable=False)
    adjustment_value = Column(Numeric(12, 4), nullable=False)
    priority = Column(Integer, nullable=False, default=0)
    status = Column(SQLEnum(EntityStatus), nullable=False, default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rate_plan = relationship("RatePlan", back_populates="tiers")


class RateOverride(Base):
    """Dated override; room_type_id NULL applies to every room type of the plan"""
    __tablename__ = "rate_overrides"

    id = Column(Integer, primary_key=True, index=True)
    rate_plan_id = Column(Integer, ForeignKey("rate_plans.id"), nullable=False, index=True)
    room_type_id = Column(Integer, ForeignKey("room_types.id"))
    override_date = Column(Date, nullable=False, index=True)
    override_type = Column(SQLEnum(OverrideType), nullable=False)
    override_value = Column(Numeric(12, 4), nullable=False)
    reason = Column(Text)
    status = Column(SQLEnum(EntityStatus), nullable=False, default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rate_plan = relationship("RatePlan", back_populates="overrides")
    room_type = relationship("RoomType", back_populates="rate_overrides")


class RatePackageComponent(Base):
    """Item bundled into a rate plan"""
    __tablename__ = "rate_package_components"

    id = Column(Integer, primary_key=True, index=True)
    rate_plan_id = Column(Integer, ForeignKey("rate_plans.id"), nullable=False, index=True)
    component_type = Column(SQLEnum(ComponentType), nullable=False)
    component_code = Column(String(40))
    component_name = Column(String(100), nullable=False)
    description = Column(Text)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2))                           # NULL = free
    price_adult = Column(Numeric(10, 2))
    price_child = Column(Numeric(10, 2))
    price_infant = Column(Numeric(10, 2))
    is_included = Column(Boolean, nullable=False, default=False)
    status = Column(SQLEnum(EntityStatus), nullable=False, default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rate_plan = relationship("RatePlan", back_populates="package_components")


class RoomRate(Base):
    """Published base rate of a room type under a rate plan for one date"""
    __tablename__ = "room_rates"
    __table_args__ = (
        UniqueConstraint("rate_plan_id", "room_type_id", "rate_date", name="uq_room_rate_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    rate_plan_id = Column(Integer, ForeignKey("rate_plans.id"), nullable=False, index=True)
    room_type_id = Column(Integer, ForeignKey("room_types.id"), nullable=False)
    rate_date = Column(Date, nullable=False, index=True)
    rate_amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3))
    stop_sell = Column(Boolean, default=False)
    status = Column(SQLEnum(EntityStatus), nullable=False, default=EntityStatus.ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rate_plan = relationship("RatePlan", back_populates="room_rates")
    room_type = relationship("RoomType", back_populates="room_rates")


# ============== Audit ==============

class RateAuditLog(Base):
    """
    Rate change audit trail
    previous_value / new_value hold JSON snapshots of the entity.
    """
    __tablename__ = "rate_audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(SQLEnum(AuditEntityType), nullable=False, index=True)
    entity_id = Column(Integer, nullable=False, index=True)
    entity_name = Column(String(120))
    action = Column(SQLEnum(AuditAction), nullable=False)
    user_id = Column(Integer, ForeignKey("employees.id"))
    user_name = Column(String(50))
    previous_value = Column(Text)
    new_value = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
