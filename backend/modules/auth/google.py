"""
Google ID token verification.

Google sign-in clients post the ID token they received from Google. The
token is checked here against Google's published signing keys and this
app's OAuth client ID before any account is looked up.
"""

import logging
from typing import Any, Callable, Optional

import jwt
from jwt.exceptions import PyJWKClientConnectionError, PyJWKClientError

from modules.users import GoogleProfile
from shared.exceptions import ExternalServiceError

from .exceptions import InvalidGoogleTokenError

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")
ALGORITHMS = ["RS256"]

# Maps a raw ID token to the public key that should have signed it
KeyResolver = Callable[[str], Any]


def _jwks_key_resolver(url: str = GOOGLE_CERTS_URL) -> KeyResolver:
    client = jwt.PyJWKClient(url, cache_keys=True)

    def resolve(id_token: str) -> Any:
        return client.get_signing_key_from_jwt(id_token).key

    return resolve


class GoogleTokenVerifier:
    """
    Verifies Google ID tokens for one OAuth client.

    verify() may fetch Google's key set over the network; async callers
    run it in a worker thread.
    """

    def __init__(self, client_id: str, key_resolver: Optional[KeyResolver] = None):
        if not client_id:
            raise ValueError("Google client ID must not be empty")
        self._client_id = client_id
        self._resolve_key = key_resolver or _jwks_key_resolver()

    def verify(self, id_token: str) -> GoogleProfile:
        """
        Check signature, audience, issuer and expiry, then build the profile.

        Raises:
            InvalidGoogleTokenError: the token does not verify
            ExternalServiceError: Google's key set could not be fetched
        """
        try:
            key = self._resolve_key(id_token)
            claims = jwt.decode(
                id_token,
                key,
                algorithms=ALGORITHMS,
                audience=self._client_id,
                options={"require": ["iss", "sub", "aud", "exp", "iat"]},
            )
        except PyJWKClientConnectionError as e:
            raise ExternalServiceError(f"Could not fetch Google signing keys: {e}", service="google") from e
        except (PyJWKClientError, jwt.InvalidTokenError) as e:
            raise InvalidGoogleTokenError(type(e).__name__) from e

        if claims["iss"] not in GOOGLE_ISSUERS:
            raise InvalidGoogleTokenError("unexpected issuer")
        if not claims.get("email"):
            raise InvalidGoogleTokenError("no email claim")

        return GoogleProfile(
            google_id=claims["sub"],
            email=claims["email"],
            email_verified=claims.get("email_verified") in (True, "true"),
            first_name=claims.get("given_name"),
            last_name=claims.get("family_name"),
            picture=claims.get("picture"),
        )
