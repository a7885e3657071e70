"""
Token module exceptions.

Every token failure carries a TokenErrorKind so the authentication resolver
can classify it without inspecting messages.
"""

from enum import Enum

from shared.exceptions import AuthenticationError


class TokenErrorKind(str, Enum):
    EXPIRED = "expired"
    TOO_OLD = "too_old"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"


class TokenError(AuthenticationError):
    """Base class for token validation failures."""

    kind: TokenErrorKind

    def __init__(self, kind: TokenErrorKind, message: str):
        super().__init__(message, code=f"TOKEN_{kind.name}", details={"kind": kind.value})
        self.kind = kind


class ExpiredTokenError(TokenError):
    """Raised when a token is past its expiry or its maximum age."""

    def __init__(self, too_old: bool = False):
        if too_old:
            super().__init__(TokenErrorKind.TOO_OLD, "Token exceeds maximum age")
        else:
            super().__init__(TokenErrorKind.EXPIRED, "Token has expired")


class MalformedTokenError(TokenError):
    """Raised when a token cannot be decoded or its claims are invalid."""

    def __init__(self, message: str = "Malformed token"):
        super().__init__(TokenErrorKind.MALFORMED, message)


class BadSignatureError(TokenError):
    """Raised when a token's signature does not match."""

    def __init__(self, message: str = "Token signature verification failed"):
        super().__init__(TokenErrorKind.BAD_SIGNATURE, message)
