"""
Password module exceptions.
"""

from typing import Any, Optional

from shared.exceptions import MabarError, ValidationError

from .models import PasswordRejection


class WeakPasswordError(ValidationError):
    """Raised when a password does not satisfy the active policy."""

    def __init__(self, reason: PasswordRejection, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message,
            code="WEAK_PASSWORD",
            details={"reason": reason.value, **(details or {})},
        )
        self.reason = reason


class InvalidPasswordHashError(MabarError):
    """Raised when a stored hash string cannot be parsed."""

    def __init__(self, message: str = "Stored password hash is malformed"):
        super().__init__(message, code="INVALID_PASSWORD_HASH")


class PasswordHashingError(MabarError):
    """Raised when the hashing backend fails."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message, code="PASSWORD_HASHING_FAILED")
