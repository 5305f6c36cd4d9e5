"""
Permission codes and the role -> permission mapping
"""
from typing import Dict, FrozenSet

from app.models.orm import EmployeeRole

# Rates
RATE_READ = "rate:read"
RATE_WRITE = "rate:write"

# Quotes
QUOTE_EXECUTE = "quote:execute"

# Audit
AUDIT_READ = "audit:read"

ALL_PERMISSIONS: FrozenSet[str] = frozenset({RATE_READ, RATE_WRITE, QUOTE_EXECUTE, AUDIT_READ})

ROLE_PERMISSIONS: Dict[EmployeeRole, FrozenSet[str]] = {
    EmployeeRole.DIRECTOR: ALL_PERMISSIONS,
    EmployeeRole.ADMIN: ALL_PERMISSIONS,
    EmployeeRole.MANAGER: frozenset({RATE_READ, RATE_WRITE, QUOTE_EXECUTE, AUDIT_READ}),
    EmployeeRole.ACCOUNTING: frozenset({RATE_READ, QUOTE_EXECUTE, AUDIT_READ}),
    EmployeeRole.FRONT_DESK: frozenset({RATE_READ, QUOTE_EXECUTE}),
    EmployeeRole.HOUSEKEEPING: frozenset(),
}


def permissions_for(role: EmployeeRole) -> FrozenSet[str]:
    return ROLE_PERMISSIONS.get(role, frozenset())
