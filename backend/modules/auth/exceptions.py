"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API error
handlers, which replace the specific reason with a generic message.
"""

from enum import Enum

from shared.exceptions import AuthenticationError, NotFoundError, ValidationError


class AuthFailureReason(str, Enum):
    """Why a bearer token did not produce an identity."""

    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"
    MALFORMED = "malformed"
    USER_NOT_FOUND = "user_not_found"
    USER_DEACTIVATED = "user_deactivated"
    MISSING_CREDENTIALS = "missing_credentials"


class LoginFailureReason(str, Enum):
    """Why a credential check failed. Logged, never returned."""

    UNKNOWN_EMAIL = "unknown_email"
    WRONG_PASSWORD = "wrong_password"
    NO_PASSWORD = "no_password"
    INVALID_HASH = "invalid_hash"
    DEACTIVATED = "deactivated"
    NOT_ADMIN = "not_admin"
    UNVERIFIED_EMAIL = "unverified_email"


class AuthenticationFailed(AuthenticationError):
    """Raised when a request's bearer token cannot be resolved to a user."""

    def __init__(self, reason: AuthFailureReason):
        super().__init__(
            f"Authentication failed: {reason.value}",
            code="AUTHENTICATION_FAILED",
            details={"reason": reason.value},
        )
        self.reason = reason


class MissingTokenError(AuthenticationFailed):
    """Raised when no authentication token is provided."""

    def __init__(self):
        super().__init__(AuthFailureReason.MISSING_CREDENTIALS)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password (or admin) login fails."""

    def __init__(self, reason: LoginFailureReason):
        super().__init__(
            f"Login failed: {reason.value}",
            code="INVALID_CREDENTIALS",
            details={"reason": reason.value},
        )
        self.reason = reason


class InvalidRoleError(ValidationError):
    """Raised when a role value is not one of the known roles."""

    def __init__(self, value: str):
        super().__init__(
            f"Invalid role: {value}",
            code="INVALID_ROLE",
            details={"role": value},
        )


class RoleNotAssignableError(ValidationError):
    """Raised when a user tries to give themselves a privileged role."""

    def __init__(self, role: str):
        super().__init__(
            f"Role cannot be self-assigned: {role}",
            code="ROLE_NOT_ASSIGNABLE",
            details={"role": role},
        )


class InvalidGoogleTokenError(AuthenticationError):
    """Raised when a Google ID token fails verification."""

    def __init__(self, detail: str):
        super().__init__(
            f"Google ID token rejected: {detail}",
            code="INVALID_GOOGLE_TOKEN",
            details={"reason": detail},
        )


class GoogleSignInDisabledError(NotFoundError):
    """Raised when Google sign-in is used without a configured client ID."""

    def __init__(self):
        super().__init__("Google sign-in is not enabled", code="GOOGLE_SIGN_IN_DISABLED")
