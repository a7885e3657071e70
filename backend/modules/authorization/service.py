"""
Authorization gate.

The single place where roles are compared. Route dependencies and services
ask the gate; nothing else inspects role values.
"""

from collections.abc import Collection
from typing import Optional, Union

from shared.models import AuthenticatedUser, UserRole

from .exceptions import InsufficientPermissionsError, NoRoleAssignedError
from .models import ROLE_PERMISSIONS, ROLE_RANK, Permission

RoleRequirement = Union[UserRole, Collection[UserRole]]


def has_role_or_higher(role: UserRole, required: UserRole) -> bool:
    return ROLE_RANK[role] >= ROLE_RANK[required]


def has_permission(role: Optional[UserRole], permission: Union[Permission, str]) -> bool:
    """Check the permission table. Unknown permissions and no role are denied."""
    if role is None:
        return False
    if isinstance(permission, str):
        try:
            permission = Permission(permission)
        except ValueError:
            return False
    return permission in ROLE_PERMISSIONS[role]


class AuthorizationGate:
    """
    Allows or denies an identity against a role requirement.

    A single UserRole is a minimum rank (admin satisfies player); a
    collection of roles requires membership.
    """

    def authorize(self, identity: AuthenticatedUser, required: RoleRequirement) -> None:
        """
        Raises:
            NoRoleAssignedError: the identity has no role
            InsufficientPermissionsError: the role does not satisfy the requirement
        """
        if identity.role is None:
            raise NoRoleAssignedError(identity.id)

        if isinstance(required, UserRole):
            if has_role_or_higher(identity.role, required):
                return
            raise InsufficientPermissionsError(required.value, identity.role.value)

        if identity.role in required:
            return
        raise InsufficientPermissionsError(
            ",".join(sorted(r.value for r in required)),
            identity.role.value,
        )

    def is_authorized(self, identity: AuthenticatedUser, required: RoleRequirement) -> bool:
        if identity.role is None:
            return False
        if isinstance(required, UserRole):
            return has_role_or_higher(identity.role, required)
        return identity.role in required

    def has_permission(self, role: Optional[UserRole], permission: Union[Permission, str]) -> bool:
        return has_permission(role, permission)

    def require_permission(self, identity: AuthenticatedUser, permission: Union[Permission, str]) -> None:
        """
        Raises:
            NoRoleAssignedError: the identity has no role
            InsufficientPermissionsError: the role lacks the permission
        """
        if identity.role is None:
            raise NoRoleAssignedError(identity.id)
        if not has_permission(identity.role, permission):
            name = permission.value if isinstance(permission, Permission) else permission
            raise InsufficientPermissionsError(name, identity.role.value)

    def can_self_assign(self, role: UserRole) -> bool:
        """Roles a user may pick for themselves during onboarding."""
        return role != UserRole.ADMIN
