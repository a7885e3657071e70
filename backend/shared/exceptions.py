"""
Base exception classes for the MaBar backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status in api/errors.py.
"""

from typing import Optional, Any


class MabarError(Exception):
    """
    Base exception for all MaBar errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logs and internal APIs."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(MabarError):
    """Resource not found."""

    pass


class ValidationError(MabarError):
    """Input validation failed."""

    pass


class ConflictError(MabarError):
    """Resource already exists or is in a conflicting state."""

    pass


class AuthenticationError(MabarError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(MabarError):
    """Authorization failed (insufficient permissions)."""

    pass


class RateLimitExceededError(MabarError):
    """Client exceeded its request allowance."""

    def __init__(self, client_key: str):
        super().__init__(
            "Rate limit exceeded",
            code="RATE_LIMIT_EXCEEDED",
            details={"client_key": client_key},
        )


class ExternalServiceError(MabarError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
