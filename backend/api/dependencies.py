"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations from one Settings instance. Each component receives its
configuration through its constructor; nothing below this layer reads
settings on its own.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import PersistenceMode, Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.google import GoogleTokenVerifier
    from modules.auth.interfaces import IAuthService
    from modules.auth.resolver import AuthenticationResolver
    from modules.authorization import AuthorizationGate
    from modules.passwords import PasswordPolicyEngine
    from modules.ratelimit import FixedWindowRateLimiter
    from modules.tokens import TokenService
    from modules.users import IUserRepository


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached for the life of
    the container. Use reset() to clear them for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._users: "IUserRepository | None" = None
        self._passwords: "PasswordPolicyEngine | None" = None
        self._tokens: "TokenService | None" = None
        self._gate: "AuthorizationGate | None" = None
        self._resolver: "AuthenticationResolver | None" = None
        self._google: "GoogleTokenVerifier | None" = None
        self._auth_service: "IAuthService | None" = None
        self._auth_limiter: "FixedWindowRateLimiter | None" = None
        self._api_limiter: "FixedWindowRateLimiter | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def users(self) -> "IUserRepository":
        """Get the user store selected by PERSISTENCE_MODE."""
        if self._users is None:
            if self.settings.persistence_mode == PersistenceMode.MEMORY:
                from modules.users import InMemoryUserRepository
                self._users = InMemoryUserRepository()
            else:
                from modules.users import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._users = SupabaseUserRepository(
                    get_supabase_client(),
                    table=self.settings.users_table,
                )
        return self._users

    @property
    def passwords(self) -> "PasswordPolicyEngine":
        """Get the password engine for the configured environment."""
        if self._passwords is None:
            from modules.passwords import PasswordPolicy, PasswordPolicyEngine
            self._passwords = PasswordPolicyEngine(
                PasswordPolicy.for_environment(self.settings.environment)
            )
        return self._passwords

    @property
    def tokens(self) -> "TokenService":
        if self._tokens is None:
            from modules.tokens import TokenService
            self._tokens = TokenService.from_settings(self.settings)
        return self._tokens

    @property
    def gate(self) -> "AuthorizationGate":
        if self._gate is None:
            from modules.authorization import AuthorizationGate
            self._gate = AuthorizationGate()
        return self._gate

    @property
    def resolver(self) -> "AuthenticationResolver":
        if self._resolver is None:
            from modules.auth.resolver import AuthenticationResolver
            from shared.config import UserLookupMode
            lookup_mode = self.settings.auth_user_lookup
            self._resolver = AuthenticationResolver(
                self.tokens,
                users=self.users if lookup_mode == UserLookupMode.STORE else None,
                lookup_mode=lookup_mode,
            )
        return self._resolver

    @property
    def google(self) -> "GoogleTokenVerifier | None":
        """Google ID token verifier, or None when GOOGLE_CLIENT_ID is unset."""
        if self._google is None and self.settings.google_client_id:
            from modules.auth.google import GoogleTokenVerifier
            self._google = GoogleTokenVerifier(self.settings.google_client_id)
        return self._google

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.users,
                passwords=self.passwords,
                tokens=self.tokens,
                gate=self.gate,
                max_concurrent_hashes=self.settings.max_concurrent_hashes,
                google=self.google,
            )
        return self._auth_service

    @property
    def auth_limiter(self) -> "FixedWindowRateLimiter":
        """Limiter for the credential endpoints."""
        if self._auth_limiter is None:
            from modules.ratelimit import FixedWindowRateLimiter, RateLimitPolicy
            self._auth_limiter = FixedWindowRateLimiter(RateLimitPolicy.auth(self.settings))
        return self._auth_limiter

    @property
    def api_limiter(self) -> "FixedWindowRateLimiter":
        """Limiter for everything else."""
        if self._api_limiter is None:
            from modules.ratelimit import FixedWindowRateLimiter, RateLimitPolicy
            self._api_limiter = FixedWindowRateLimiter(RateLimitPolicy.api(self.settings))
        return self._api_limiter

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._users = None
        self._passwords = None
        self._tokens = None
        self._gate = None
        self._resolver = None
        self._google = None
        self._auth_service = None
        self._auth_limiter = None
        self._api_limiter = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a container built from explicit settings (tests, scripts)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_resolver() -> "AuthenticationResolver":
    """FastAPI dependency for the bearer token resolver."""
    return get_container().resolver


def get_authorization_gate() -> "AuthorizationGate":
    """FastAPI dependency for the authorization gate."""
    return get_container().gate
