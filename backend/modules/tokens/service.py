"""
Session token service.

Issues and validates HS256 JWTs carrying identity and role claims.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings
from shared.models import AuthenticatedUser

from .exceptions import BadSignatureError, ExpiredTokenError, MalformedTokenError
from .models import MAX_TOKEN_AGE, TOKEN_ISSUER, Claims, TokenLifetime

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
# Tolerated skew for tokens that claim to be issued in the future
IAT_LEEWAY_SECONDS = 60

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Stateless token issuer/validator.

    The secret and lifetime are fixed at construction, so a single instance
    is safe to share across concurrent requests.
    """

    def __init__(
        self,
        secret: str,
        lifetime: TokenLifetime = TokenLifetime.SEVEN_DAYS,
        clock: Optional[Clock] = None,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._lifetime = lifetime
        self._clock = clock or utc_now

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Clock] = None) -> "TokenService":
        return cls(
            secret=settings.signing_secret,
            lifetime=settings.jwt_expiry,
            clock=clock,
        )

    @property
    def lifetime(self) -> TokenLifetime:
        return self._lifetime

    def issue(self, identity: AuthenticatedUser) -> str:
        """Create a signed token for an identity."""
        now = int(self._clock().timestamp())
        payload = {
            "id": identity.id,
            "email": identity.email,
            "role": identity.role.value if identity.role else None,
            "iat": now,
            "exp": now + int(self._lifetime.duration.total_seconds()),
            "iss": TOKEN_ISSUER,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def validate(self, token: str) -> Claims:
        """
        Verify a token and return its claims.

        Expiry and age are checked against this service's clock rather than
        by PyJWT, so each failure gets a precise kind.

        Raises:
            BadSignatureError: signature does not match the secret
            MalformedTokenError: undecodable, wrong issuer or invalid claims
            ExpiredTokenError: past exp, or issued more than 7 days ago
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=TOKEN_ISSUER,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["id", "exp", "iat", "iss"],
                },
            )
        except jwt.InvalidSignatureError:
            raise BadSignatureError()
        except jwt.InvalidIssuerError:
            raise MalformedTokenError("Unexpected token issuer")
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Invalid token: {e}")

        try:
            claims = Claims(**payload)
        except PydanticValidationError as e:
            raise MalformedTokenError(f"Invalid token claims: {e.error_count()} error(s)")

        now = int(self._clock().timestamp())
        if claims.exp <= now:
            raise ExpiredTokenError()
        if claims.iat > now + IAT_LEEWAY_SECONDS:
            raise MalformedTokenError("Token issued in the future")
        if now - claims.iat > MAX_TOKEN_AGE.total_seconds():
            raise ExpiredTokenError(too_old=True)

        return claims
