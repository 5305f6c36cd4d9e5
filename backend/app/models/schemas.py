"""
Pydantic schemas
Request/response validation for the REST API
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List, Generic, TypeVar
from pydantic import BaseModel, Field, ConfigDict, model_validator
from app.models.orm import EmployeeRole, AuditAction, AuditEntityType
from rate_engine.models import AdjustmentType, ComponentType, EntityStatus, OverrideType

T = TypeVar("T")


# ============== Pagination ==============

class Page(BaseModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int


# ============== Room type Schemas ==============

class RoomTypeBase(BaseModel):
    code: str = Field(..., max_length=20)
    name: str = Field(..., max_length=50)
    description: Optional[str] = None
    base_price: Decimal = Field(..., ge=0)
    max_occupancy: int = Field(default=2, ge=1)


class RoomTypeCreate(RoomTypeBase):
    pass


class RoomTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    base_price: Optional[Decimal] = Field(None, ge=0)
    max_occupancy: Optional[int] = Field(None, ge=1)
    status: Optional[EntityStatus] = None


class RoomTypeResponse(RoomTypeBase):
    id: int
    status: EntityStatus
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Classification Schemas ==============

class ClassificationBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=40)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class ClassificationUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=40)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    status: Optional[EntityStatus] = None


class RateCategoryCreate(ClassificationBase):
    pass


class RateCategoryResponse(ClassificationBase):
    id: int
    status: EntityStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class RateClassCreate(ClassificationBase):
    rate_category_id: int


class RateClassUpdate(ClassificationUpdate):
    rate_category_id: Optional[int] = None


class RateClassResponse(ClassificationBase):
    id: int
    rate_category_id: int
    rate_category_code: Optional[str] = None
    rate_category_name: Optional[str] = None
    status: EntityStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class RateTypeCreate(ClassificationBase):
    pass


class RateTypeResponse(ClassificationBase):
    id: int
    status: EntityStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== Rate plan Schemas ==============

class RatePlanCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=40)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    status: EntityStatus = EntityStatus.ACTIVE
    is_package: bool = False
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    rate_type_id: Optional[int] = None
    rate_category_id: Optional[int] = None
    rate_class_id: Optional[int] = None

    @model_validator(mode="after")
    def check_validity_window(self):
        if self.valid_from and self.valid_to and self.valid_to < self.valid_from:
            raise ValueError("valid_to must not be earlier than valid_from")
        return self


class RatePlanUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=40)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    status: Optional[EntityStatus] = None
    is_package: Optional[bool] = None
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    rate_type_id: Optional[int] = None
    rate_category_id: Optional[int] = None
    rate_class_id: Optional[int] = None


class RatePlanResponse(BaseModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    currency: str
    status: EntityStatus
    is_package: bool = False
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    rate_type_id: Optional[int] = None
    rate_type_name: Optional[str] = None
    rate_category_id: Optional[int] = None
    rate_category_name: Optional[str] = None
    rate_class_id: Optional[int] = None
    rate_class_name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== Rate tier Schemas ==============

class RateTierCreate(BaseModel):
    rate_plan_id: int
    min_nights: int = Field(..., ge=1)
    max_nights: Optional[int] = Field(None, ge=1)
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    priority: int = Field(default=0, ge=0)
    status: EntityStatus = EntityStatus.ACTIVE

    @model_validator(mode="after")
    def check_night_range(self):
        if self.max_nights is not None and self.max_nights < self.min_nights:
            raise ValueError("max_nights must be greater than or equal to min_nights")
        return self


class RateTierUpdate(BaseModel):
    min_nights: Optional[int] = Field(None, ge=1)
    max_nights: Optional[int] = Field(None, ge=1)
    adjustment_type: Optional[AdjustmentType] = None
    adjustment_value: Optional[Decimal] = None
    priority: Optional[int] = Field(None, ge=0)
    status: Optional[EntityStatus] = None


class RateTierResponse(BaseModel):
    id: int
    rate_plan_id: int
    rate_plan_code: Optional[str] = None
    rate_plan_name: Optional[str] = None
    min_nights: int
    max_nights: Optional[int] = None
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    priority: int
    status: EntityStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class TierPriorityUpdate(BaseModel):
    id: int
    priority: int = Field(..., ge=0)


# ============== Rate override Schemas ==============

class RateOverrideCreate(BaseModel):
    rate_plan_id: int
    room_type_id: Optional[int] = None
    override_date: date
    override_type: OverrideType
    override_value: Decimal
    reason: Optional[str] = None
    status: EntityStatus = EntityStatus.ACTIVE


class RateOverrideUpdate(BaseModel):
    room_type_id: Optional[int] = None
    override_date: Optional[date] = None
    override_type: Optional[OverrideType] = None
    override_value: Optional[Decimal] = None
    reason: Optional[str] = None
    status: Optional[EntityStatus] = None


class RateOverrideResponse(BaseModel):
    id: int
    rate_plan_id: int
    rate_plan_code: Optional[str] = None
    rate_plan_name: Optional[str] = None
    room_type_id: Optional[int] = None
    room_type_code: Optional[str] = None
    room_type_name: Optional[str] = None
    override_date: date
    override_type: OverrideType
    override_value: Decimal
    reason: Optional[str] = None
    status: EntityStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== Package component Schemas ==============

class PackageComponentCreate(BaseModel):
    rate_plan_id: int
    component_type: ComponentType
    component_code: Optional[str] = Field(None, max_length=40)
    component_name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    unit_price: Optional[Decimal] = Field(None, ge=0)
    price_adult: Optional[Decimal] = Field(None, ge=0)
    price_child: Optional[Decimal] = Field(None, ge=0)
    price_infant: Optional[Decimal] = Field(None, ge=0)
    is_included: bool = False
    status: EntityStatus = EntityStatus.ACTIVE


class PackageComponentUpdate(BaseModel):
    component_type: Optional[ComponentType] = None
    component_code: Optional[str] = Field(None, max_length=40)
    component_name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=1)
    unit_price: Optional[Decimal] = Field(None, ge=0)
    price_adult: Optional[Decimal] = Field(None, ge=0)
    price_child: Optional[Decimal] = Field(None, ge=0)
    price_infant: Optional[Decimal] = Field(None, ge=0)
    is_included: Optional[bool] = None
    status: Optional[EntityStatus] = None


class PackageComponentResponse(BaseModel):
    id: int
    rate_plan_id: int
    rate_plan_code: Optional[str] = None
    rate_plan_name: Optional[str] = None
    component_type: ComponentType
    component_code: Optional[str] = None
    component_name: str
    description: Optional[str] = None
    quantity: int
    unit_price: Optional[Decimal] = None
    price_adult: Optional[Decimal] = None
    price_child: Optional[Decimal] = None
    price_infant: Optional[Decimal] = None
    is_included: bool
    status: EntityStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== Room rate Schemas ==============

class RoomRateCreate(BaseModel):
    rate_plan_id: int
    room_type_id: int
    rate_date: date
    rate_amount: Decimal = Field(..., ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    stop_sell: bool = False


class RoomRateUpdate(BaseModel):
    rate_amount: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    stop_sell: Optional[bool] = None
    status: Optional[EntityStatus] = None


class RoomRateResponse(BaseModel):
    id: int
    rate_plan_id: int
    room_type_id: int
    rate_date: date
    rate_amount: Decimal
    currency: Optional[str] = None
    stop_sell: bool
    status: EntityStatus
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Quote Schemas ==============

class GuestCountsIn(BaseModel):
    adults: int = Field(default=1, ge=0)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)


class NightlyQuoteRequest(BaseModel):
    rate_plan_id: int
    room_type_id: int
    date: date
    nights: int = Field(..., ge=1)
    guests: GuestCountsIn = Field(default_factory=GuestCountsIn)


class StayQuoteRequest(BaseModel):
    rate_plan_id: int
    room_type_id: int
    check_in_date: date
    check_out_date: date
    guests: GuestCountsIn = Field(default_factory=GuestCountsIn)

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_out_date <= self.check_in_date:
            raise ValueError("check_out_date must be after check_in_date")
        return self


class PreviewTier(BaseModel):
    id: int = 0
    min_nights: int = Field(..., ge=1)
    max_nights: Optional[int] = Field(None, ge=1)
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    priority: int = 0


class PreviewOverride(BaseModel):
    id: int = 0
    room_type_id: Optional[int] = None
    override_date: date
    override_type: OverrideType
    override_value: Decimal


class PreviewComponent(BaseModel):
    id: int = 0
    component_type: ComponentType = ComponentType.OTHER
    component_name: str = ""
    quantity: int = Field(default=1, ge=1)
    unit_price: Optional[Decimal] = None
    price_adult: Optional[Decimal] = None
    price_child: Optional[Decimal] = None
    price_infant: Optional[Decimal] = None
    is_included: bool = False


class QuotePreviewRequest(BaseModel):
    """Price an unsaved configuration"""
    base_rate: Decimal
    date: date
    nights: int = Field(..., ge=1)
    room_type_id: Optional[int] = None
    guests: GuestCountsIn = Field(default_factory=GuestCountsIn)
    tiers: List[PreviewTier] = Field(default_factory=list)
    overrides: List[PreviewOverride] = Field(default_factory=list)
    components: List[PreviewComponent] = Field(default_factory=list)


class ComponentLineResponse(BaseModel):
    component_id: int
    component_type: ComponentType
    component_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    is_included: bool
    charged: Decimal


class QuoteWarningResponse(BaseModel):
    code: str
    stage: str
    amount: Decimal


class NightlyQuoteResponse(BaseModel):
    rate_plan_id: Optional[int] = None
    room_type_id: Optional[int] = None
    date: date
    nights: int
    currency: Optional[str] = None
    base_rate: Decimal
    tier_adjusted_rate: Decimal
    final_rate: Decimal
    extras_total: Decimal
    included_value: Decimal
    nightly_total: Decimal
    applied_tier_id: Optional[int] = None
    applied_override_id: Optional[int] = None
    component_breakdown: List[ComponentLineResponse] = []
    warnings: List[QuoteWarningResponse] = []


class StayQuoteResponse(BaseModel):
    rate_plan_id: int
    room_type_id: int
    check_in_date: date
    check_out_date: date
    nights: int
    currency: Optional[str] = None
    room_total: Decimal
    extras_total: Decimal
    total: Decimal
    nightly: List[NightlyQuoteResponse] = []
    warnings: List[QuoteWarningResponse] = []


# ============== Rate matrix Schemas ==============

class RateMatrixRequest(BaseModel):
    start_date: date
    end_date: date
    room_type_ids: List[int] = Field(..., min_length=1)
    rate_plan_ids: List[int] = Field(..., min_length=1)
    length_of_stay: int = Field(default=1, ge=1)
    guests: GuestCountsIn = Field(default_factory=GuestCountsIn)

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date")
        if (self.end_date - self.start_date).days > 92:
            raise ValueError("date range must not exceed 93 days")
        return self


class RateMatrixCell(BaseModel):
    date: date
    rate_plan_id: int
    room_type_id: int
    base_rate: Optional[Decimal] = None
    final_rate: Optional[Decimal] = None
    nightly_total: Optional[Decimal] = None
    applied_tier_id: Optional[int] = None
    applied_override_id: Optional[int] = None
    stop_sell: bool = False
    error: Optional[str] = None


class RateMatrixSummary(BaseModel):
    total_room_types: int
    total_rate_plans: int
    total_days: int
    min_rate: Optional[Decimal] = None
    max_rate: Optional[Decimal] = None
    average_rate: Optional[Decimal] = None


class RateMatrixResponse(BaseModel):
    start_date: date
    end_date: date
    cells: List[RateMatrixCell]
    summary: RateMatrixSummary


# ============== Audit Schemas ==============

class RateAuditResponse(BaseModel):
    id: int
    entity_type: AuditEntityType
    entity_id: int
    entity_name: Optional[str] = None
    action: AuditAction
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    previous_value: Optional[str] = None
    new_value: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Employee / login Schemas ==============

class EmployeeResponse(BaseModel):
    id: int
    username: str
    name: str
    email: Optional[str] = None
    role: EmployeeRole
    is_active: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    employee: EmployeeResponse
