# API Routers
from app.routers import (
    auth, room_types, room_rates, rate_plans, rate_tiers, rate_overrides,
    package_components, classification, quotes, audit_logs,
)

__all__ = [
    'auth', 'room_types', 'room_rates', 'rate_plans', 'rate_tiers', 'rate_overrides',
    'package_components', 'classification', 'quotes', 'audit_logs'
]
