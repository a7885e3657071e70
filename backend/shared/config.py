"""
Centralized configuration for the MaBar backend.

All settings are loaded from environment variables with sensible defaults.
Components receive the Settings instance through their constructors; only
the dependency container and entry points call get_settings().
"""

import logging
from enum import Enum
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.models import TokenLifetime

logger = logging.getLogger(__name__)

DEVELOPMENT_JWT_SECRET = "default_secret_for_development_only"
MIN_PRODUCTION_SECRET_LENGTH = 32


class Environment(str, Enum):
    """Deployment environment; selects the password policy profile."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class PersistenceMode(str, Enum):
    """Where user documents live."""

    DATABASE = "database"  # Supabase users table
    MEMORY = "memory"  # Process-local store, development only


class UserLookupMode(str, Enum):
    """How the authentication resolver treats token claims."""

    STORE = "store"  # Re-fetch the user on every request
    CLAIMS = "claims"  # Trust the signed claims


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "MaBar API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Tokens
    jwt_secret: str = ""
    jwt_expiry: TokenLifetime = TokenLifetime.SEVEN_DAYS

    # Authentication
    auth_user_lookup: UserLookupMode = UserLookupMode.STORE
    persistence_mode: PersistenceMode = PersistenceMode.DATABASE
    max_concurrent_hashes: int = 4

    # Rate limiting
    auth_rate_limit_requests: int = 5
    auth_rate_limit_window: int = 15 * 60  # seconds
    api_rate_limit_requests: int = 100
    api_rate_limit_window: int = 15 * 60  # seconds

    # Google sign-in (OAuth client ID the ID tokens must be issued for)
    google_client_id: str = ""

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    users_table: str = "users"

    # Admin bootstrap
    admin_email: str = ""
    admin_password: str = ""
    admin_first_name: str = "Admin"
    admin_last_name: str = "User"

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"

    @model_validator(mode="after")
    def _check_environment(self) -> "Settings":
        if self.environment == Environment.PRODUCTION:
            if len(self.jwt_secret) < MIN_PRODUCTION_SECRET_LENGTH:
                raise ValueError(
                    f"JWT_SECRET must be at least {MIN_PRODUCTION_SECRET_LENGTH} "
                    "characters in production"
                )
            if self.persistence_mode == PersistenceMode.MEMORY:
                raise ValueError("PERSISTENCE_MODE=memory is not allowed in production")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def signing_secret(self) -> str:
        """The JWT signing secret, with the development fallback applied."""
        if self.jwt_secret:
            return self.jwt_secret
        logger.warning("JWT_SECRET not set, using development default")
        return DEVELOPMENT_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
