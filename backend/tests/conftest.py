"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Every test runs against a fresh container built from development settings
and the in-memory user store.
"""

import time

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient

from api.dependencies import ServiceContainer, reset_container, set_container
from modules.auth.google import GoogleTokenVerifier
from modules.passwords import PasswordPolicy, PasswordPolicyEngine
from modules.tokens import TokenService
from modules.users import InMemoryUserRepository, User
from shared.config import Environment, PersistenceMode, Settings
from shared.models import UserRole


# Test JWT secret (only for testing, long enough for production validation)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

# Satisfies the development policy
STRONG_PASSWORD = "Str0ngP@ss!"

GOOGLE_CLIENT_ID = "mabar-test.apps.googleusercontent.com"


def make_settings(**overrides) -> Settings:
    """Development settings wired to the in-memory store."""
    values = {
        "environment": Environment.DEVELOPMENT,
        "persistence_mode": PersistenceMode.MEMORY,
        "jwt_secret": TEST_JWT_SECRET,
        "auth_rate_limit_requests": 100,
        "admin_email": "",
        "admin_password": "",
        "google_client_id": "",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the container singleton before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def container(settings: Settings) -> ServiceContainer:
    """Install a container built from the test settings."""
    container = ServiceContainer(settings)
    set_container(container)
    return container


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    """TestClient for a freshly built app."""
    from api.app import create_app

    return TestClient(create_app())


@pytest.fixture
def passwords() -> PasswordPolicyEngine:
    return PasswordPolicyEngine(PasswordPolicy.development())


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_JWT_SECRET)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def make_user(passwords: PasswordPolicyEngine):
    """Factory for User records with a hashed STRONG_PASSWORD."""
    password_hash = passwords.hash(STRONG_PASSWORD)

    def _make_user(
        email: str = "player@mabar.com",
        role: UserRole | None = UserRole.PLAYER,
        **fields,
    ) -> User:
        fields.setdefault("password_hash", password_hash)
        return User(email=email, role=role, **fields)

    return _make_user


def auth_headers(token: str) -> dict[str, str]:
    """Create authorization headers for a token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session")
def google_signing_key() -> rsa.RSAPrivateKey:
    """RSA key standing in for Google's ID token signing key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def google_verifier(google_signing_key) -> GoogleTokenVerifier:
    """Verifier that trusts google_signing_key instead of fetching Google's keys."""
    public_key = google_signing_key.public_key()
    return GoogleTokenVerifier(GOOGLE_CLIENT_ID, key_resolver=lambda token: public_key)


def google_id_token(signing_key, **claims) -> str:
    """Sign a Google-style ID token; keyword arguments override the defaults."""
    now = int(time.time())
    payload = {
        "iss": "https://accounts.google.com",
        "aud": GOOGLE_CLIENT_ID,
        "sub": "g-1",
        "email": "ana@mabar.com",
        "email_verified": True,
        "given_name": "Ana",
        "iat": now,
        "exp": now + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, signing_key, algorithm="RS256")
