"""
Token module.

Signed session tokens (HS256 JWT) with identity and role claims.

Public API:
- TokenService: issue / validate
- Claims, TokenLifetime
- Token exceptions: TokenError and its kinds
"""

from .models import Claims, TokenLifetime, TOKEN_ISSUER, MAX_TOKEN_AGE
from .service import TokenService, utc_now
from .exceptions import (
    TokenError,
    TokenErrorKind,
    ExpiredTokenError,
    MalformedTokenError,
    BadSignatureError,
)

__all__ = [
    "TokenService",
    "utc_now",
    "Claims",
    "TokenLifetime",
    "TOKEN_ISSUER",
    "MAX_TOKEN_AGE",
    "TokenError",
    "TokenErrorKind",
    "ExpiredTokenError",
    "MalformedTokenError",
    "BadSignatureError",
]
