"""
Authorization module.

Role hierarchy (player < venue_owner < admin) and the cumulative
permission table.

Public API:
- AuthorizationGate: authorize / is_authorized / has_permission / require_permission
- Permission, ROLE_RANK, ROLE_PERMISSIONS
- Authorization exceptions: NoRoleAssignedError, InsufficientPermissionsError
"""

from .models import Permission, ROLE_PERMISSIONS, ROLE_RANK
from .service import AuthorizationGate, has_permission, has_role_or_higher
from .exceptions import InsufficientPermissionsError, NoRoleAssignedError

__all__ = [
    "AuthorizationGate",
    "has_permission",
    "has_role_or_higher",
    "Permission",
    "ROLE_PERMISSIONS",
    "ROLE_RANK",
    "InsufficientPermissionsError",
    "NoRoleAssignedError",
]
