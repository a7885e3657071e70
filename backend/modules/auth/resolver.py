"""
Authentication resolver.

Turns a raw Authorization header into an AuthenticatedUser, nothing, or an
AuthenticationFailed carrying the precise reason.
"""

from typing import Optional

from shared.config import UserLookupMode
from shared.models import AuthenticatedUser
from modules.tokens import TokenError, TokenErrorKind, TokenService
from modules.users import IUserRepository

from .exceptions import AuthenticationFailed, AuthFailureReason, MissingTokenError

_TOKEN_REASONS = {
    TokenErrorKind.EXPIRED: AuthFailureReason.EXPIRED,
    TokenErrorKind.TOO_OLD: AuthFailureReason.EXPIRED,
    TokenErrorKind.MALFORMED: AuthFailureReason.MALFORMED,
    TokenErrorKind.BAD_SIGNATURE: AuthFailureReason.BAD_SIGNATURE,
}


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from 'Bearer <token>', or None for anything else."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class AuthenticationResolver:
    """
    Resolves bearer tokens to identities.

    In STORE mode (the default) the user is re-read on every request so a
    deactivation or role change takes effect immediately; the returned
    identity reflects the live record. In CLAIMS mode the signed claims are
    trusted and no store is needed.
    """

    def __init__(
        self,
        tokens: TokenService,
        users: Optional[IUserRepository] = None,
        lookup_mode: UserLookupMode = UserLookupMode.STORE,
    ):
        if lookup_mode == UserLookupMode.STORE and users is None:
            raise ValueError("Store-backed lookup requires a user repository")
        self._tokens = tokens
        self._users = users
        self._lookup_mode = lookup_mode

    @property
    def lookup_mode(self) -> UserLookupMode:
        return self._lookup_mode

    async def resolve(
        self,
        authorization: Optional[str],
        *,
        required: bool = True,
    ) -> Optional[AuthenticatedUser]:
        """
        Resolve an Authorization header value.

        Returns:
            The identity, or None when authentication is optional and the
            header is absent or does not authenticate

        Raises:
            AuthenticationFailed: required mode only
        """
        try:
            return await self.authenticate(authorization)
        except AuthenticationFailed:
            if required:
                raise
            return None

    async def authenticate(self, authorization: Optional[str]) -> AuthenticatedUser:
        """Required-mode resolution; always returns an identity or raises."""
        token = extract_bearer_token(authorization)
        if token is None:
            raise MissingTokenError()

        try:
            claims = self._tokens.validate(token)
        except TokenError as e:
            raise AuthenticationFailed(_TOKEN_REASONS[e.kind]) from e

        if self._lookup_mode == UserLookupMode.CLAIMS:
            return claims.to_identity()

        user = await self._users.find_by_id(claims.id)
        if user is None:
            raise AuthenticationFailed(AuthFailureReason.USER_NOT_FOUND)
        if not user.is_active:
            raise AuthenticationFailed(AuthFailureReason.USER_DEACTIVATED)
        return user.to_identity()
