"""
Authorization module exceptions.
"""

from shared.exceptions import AuthorizationError


class NoRoleAssignedError(AuthorizationError):
    """Raised when the user has not selected a role yet."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User {user_id} has no role assigned",
            code="NO_ROLE_ASSIGNED",
            details={"user_id": user_id},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required": required, "user_role": user_role},
        )
