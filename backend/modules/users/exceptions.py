"""
User module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user document does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when inserting a user whose email is taken."""

    def __init__(self, email: str):
        super().__init__(
            "Email already registered",
            code="EMAIL_TAKEN",
            details={"email": email},
        )


class InvalidEmailError(ValidationError):
    """Raised when an email address is malformed."""

    def __init__(self, message: str = "Invalid email format"):
        super().__init__(message, code="INVALID_EMAIL")
