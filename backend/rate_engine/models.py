"""
rate_engine/models.py

Rate entity model used by the pricing engine.

These are plain dataclasses, independent of any persistence layer. Values
are coerced on construction (strings to enums, numbers to Decimal); range
invariants are checked by ``validate()``, which the resolvers call before
using an entity.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Type, TypeVar

from rate_engine.errors import ConfigurationError, InvalidQuoteRequest
from rate_engine.money import to_decimal, to_optional_decimal

E = TypeVar("E", bound=Enum)


class EntityStatus(str, Enum):
    """Lifecycle status shared by all rate entities."""
    PENDING = "PENDING"
    DELETED = "DELETED"
    CREATED = "CREATED"
    PUBLISHED = "PUBLISHED"
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class AdjustmentType(str, Enum):
    """How a tier transforms the base rate."""
    PERCENTAGE = "PERCENTAGE"   # base * (1 + value/100)
    FIXED = "FIXED"             # base + value
    MULTIPLIER = "MULTIPLIER"   # base * value


class OverrideType(str, Enum):
    """How a dated override sets the nightly rate."""
    FIXED = "FIXED"             # rate = value
    PERCENTAGE = "PERCENTAGE"   # base * (1 + value/100)
    DISCOUNT = "DISCOUNT"       # base - value
    SURCHARGE = "SURCHARGE"     # base + value


class ComponentType(str, Enum):
    """Kind of item bundled into a package rate plan."""
    SERVICE = "SERVICE"
    MEAL = "MEAL"
    ACTIVITY = "ACTIVITY"
    TRANSPORTATION = "TRANSPORTATION"
    AMENITY = "AMENITY"
    DISCOUNT = "DISCOUNT"
    OTHER = "OTHER"


def coerce_enum(enum_cls: Type[E], value, field_name: str) -> E:
    """Convert a raw value into ``enum_cls`` or raise ConfigurationError."""
    if isinstance(value, enum_cls):
        return value
    raw = getattr(value, "value", value)
    if isinstance(raw, str):
        raw = raw.strip().upper()
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"{field_name} must be one of {allowed}, got {value!r}")


@dataclass
class RatePlan:
    """A sellable rate."""

    id: int
    code: str
    name: str = ""
    currency: str = "USD"
    status: EntityStatus = EntityStatus.ACTIVE

    def __post_init__(self):
        self.status = coerce_enum(EntityStatus, self.status, "status")

    @property
    def is_active(self) -> bool:
        return self.status == EntityStatus.ACTIVE


@dataclass
class RateTier:
    """
    Length-of-stay adjustment belonging to one rate plan.

    Attributes:
        id: Tier identifier (final tie-break when ordering).
        rate_plan_id: Owning rate plan.
        min_nights: Inclusive lower bound, >= 1.
        max_nights: Inclusive upper bound, None for unbounded.
        adjustment_type: PERCENTAGE, FIXED or MULTIPLIER.
        adjustment_value: Signed value interpreted per adjustment_type.
        priority: Lower values are evaluated first.
        status: Only ACTIVE tiers take part in pricing.
    """

    id: int
    rate_plan_id: int
    min_nights: int
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    max_nights: Optional[int] = None
    priority: int = 0
    status: EntityStatus = EntityStatus.ACTIVE

    def __post_init__(self):
        self.adjustment_type = coerce_enum(AdjustmentType, self.adjustment_type, "adjustment_type")
        self.adjustment_value = to_decimal(self.adjustment_value, "adjustment_value")
        self.status = coerce_enum(EntityStatus, self.status, "status")

    @property
    def is_active(self) -> bool:
        return self.status == EntityStatus.ACTIVE

    def validate(self) -> None:
        """Raise ConfigurationError if the night range is malformed."""
        if self.min_nights is None or self.min_nights < 1:
            raise ConfigurationError(
                f"Rate tier {self.id}: min_nights must be >= 1, got {self.min_nights}"
            )
        if self.max_nights is not None and self.max_nights < self.min_nights:
            raise ConfigurationError(
                f"Rate tier {self.id}: max_nights ({self.max_nights}) "
                f"is less than min_nights ({self.min_nights})"
            )

    def covers(self, nights: int) -> bool:
        if nights < self.min_nights:
            return False
        return self.max_nights is None or nights <= self.max_nights


@dataclass
class RateOverride:
    """
    Date-scoped rate override. ``room_type_id`` None means plan-wide.
    """

    id: int
    rate_plan_id: int
    override_date: date
    override_type: OverrideType
    override_value: Decimal
    room_type_id: Optional[int] = None
    reason: Optional[str] = None
    status: EntityStatus = EntityStatus.ACTIVE

    def __post_init__(self):
        self.override_type = coerce_enum(OverrideType, self.override_type, "override_type")
        self.override_value = to_decimal(self.override_value, "override_value")
        self.status = coerce_enum(EntityStatus, self.status, "status")

    @property
    def is_active(self) -> bool:
        return self.status == EntityStatus.ACTIVE

    @property
    def is_room_specific(self) -> bool:
        return self.room_type_id is not None

    def validate(self) -> None:
        if not isinstance(self.override_date, date):
            raise ConfigurationError(
                f"Rate override {self.id}: override_date must be a date, got {self.override_date!r}"
            )


@dataclass
class RatePackageComponent:
    """
    Item bundled with a rate plan.

    Age-band prices, when any is set, replace ``unit_price`` for the
    per-unit amount. ``unit_price`` None means the item is free.
    """

    id: int
    rate_plan_id: int
    component_type: ComponentType
    component_name: str = ""
    quantity: int = 1
    unit_price: Optional[Decimal] = None
    price_adult: Optional[Decimal] = None
    price_child: Optional[Decimal] = None
    price_infant: Optional[Decimal] = None
    is_included: bool = False
    component_code: Optional[str] = None
    status: EntityStatus = EntityStatus.ACTIVE

    def __post_init__(self):
        self.component_type = coerce_enum(ComponentType, self.component_type, "component_type")
        self.unit_price = to_optional_decimal(self.unit_price, "unit_price")
        self.price_adult = to_optional_decimal(self.price_adult, "price_adult")
        self.price_child = to_optional_decimal(self.price_child, "price_child")
        self.price_infant = to_optional_decimal(self.price_infant, "price_infant")
        self.status = coerce_enum(EntityStatus, self.status, "status")

    @property
    def is_active(self) -> bool:
        return self.status == EntityStatus.ACTIVE

    @property
    def has_age_band_pricing(self) -> bool:
        return any(p is not None for p in (self.price_adult, self.price_child, self.price_infant))

    def validate(self) -> None:
        if self.quantity is None or self.quantity < 1:
            raise ConfigurationError(
                f"Package component {self.id}: quantity must be >= 1, got {self.quantity}"
            )


@dataclass(frozen=True)
class GuestCounts:
    """Guests in the room, per age band."""

    adults: int = 1
    children: int = 0
    infants: int = 0

    def __post_init__(self):
        for name in ("adults", "children", "infants"):
            if getattr(self, name) < 0:
                raise InvalidQuoteRequest(f"{name} must be >= 0")

    @property
    def total(self) -> int:
        return self.adults + self.children + self.infants


@dataclass
class ComponentLine:
    """One itemised line of a package breakdown (unrounded)."""

    component_id: int
    component_type: ComponentType
    component_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    is_included: bool

    @property
    def charged(self) -> Decimal:
        """Amount added to the guest-facing total."""
        return Decimal("0") if self.is_included else self.line_total


@dataclass
class PackagePricing:
    """Result of aggregating package components."""

    extras_total: Decimal
    included_value: Decimal
    lines: list = field(default_factory=list)
