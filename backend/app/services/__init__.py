# Business Services
from app.services.employee_service import EmployeeService
from app.services.room_type_service import RoomTypeService
from app.services.room_rate_service import RoomRateService
from app.services.rate_plan_service import RatePlanService
from app.services.rate_tier_service import RateTierService
from app.services.rate_override_service import RateOverrideService
from app.services.package_component_service import PackageComponentService
from app.services.classification_service import RateCategoryService, RateClassService, RateTypeService
from app.services.rate_audit_service import RateAuditService
from app.services.rate_repository import SqlAlchemyRateRepository
from app.services.quote_service import QuoteService

__all__ = [
    'EmployeeService', 'RoomTypeService', 'RoomRateService', 'RatePlanService',
    'RateTierService', 'RateOverrideService', 'PackageComponentService',
    'RateCategoryService', 'RateClassService', 'RateTypeService',
    'RateAuditService', 'SqlAlchemyRateRepository', 'QuoteService'
]
