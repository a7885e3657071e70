import pytest
from datetime import datetime, timedelta, timezone

from conftest import TEST_JWT_SECRET
from modules.auth import (
    AuthenticationFailed,
    AuthenticationResolver,
    AuthFailureReason,
    MissingTokenError,
    extract_bearer_token,
)
from modules.tokens import TokenService
from shared.config import UserLookupMode
from shared.models import UserRole


class TestExtractBearerToken:
    def test_bearer_header(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc") == "abc"

    def test_missing_or_empty(self):
        """Absent header, other schemes and empty tokens give None."""
        assert extract_bearer_token(None) is None
        assert extract_bearer_token("") is None
        assert extract_bearer_token("Bearer ") is None
        assert extract_bearer_token("Basic dXNlcjpwYXNz") is None


class TestStoreLookup:
    @pytest.fixture
    def resolver(self, token_service, user_repository):
        return AuthenticationResolver(token_service, users=user_repository)

    @pytest.mark.asyncio
    async def test_resolves_live_user(self, resolver, token_service, user_repository, make_user):
        """The identity comes from the store, not the claims."""
        user = await user_repository.insert(make_user(role=None))
        token = token_service.issue(user.to_identity())
        await user_repository.update(user.id, {"role": UserRole.VENUE_OWNER})

        identity = await resolver.authenticate(f"Bearer {token}")

        assert identity.id == user.id
        assert identity.role == UserRole.VENUE_OWNER

    @pytest.mark.asyncio
    async def test_deactivated_user(self, resolver, token_service, user_repository, make_user):
        """Deactivation takes effect on the next request."""
        user = await user_repository.insert(make_user())
        token = token_service.issue(user.to_identity())
        await user_repository.update(user.id, {"is_active": False})

        with pytest.raises(AuthenticationFailed) as exc_info:
            await resolver.authenticate(f"Bearer {token}")
        assert exc_info.value.reason == AuthFailureReason.USER_DEACTIVATED

    @pytest.mark.asyncio
    async def test_deleted_user(self, resolver, token_service, make_user):
        token = token_service.issue(make_user().to_identity())
        with pytest.raises(AuthenticationFailed) as exc_info:
            await resolver.authenticate(f"Bearer {token}")
        assert exc_info.value.reason == AuthFailureReason.USER_NOT_FOUND

    @pytest.mark.asyncio
    async def test_missing_header(self, resolver):
        with pytest.raises(MissingTokenError) as exc_info:
            await resolver.authenticate(None)
        assert exc_info.value.reason == AuthFailureReason.MISSING_CREDENTIALS

    @pytest.mark.asyncio
    async def test_bad_signature(self, resolver, make_user):
        other = TokenService("another-secret-entirely-0123456789abcdef")
        token = other.issue(make_user().to_identity())
        with pytest.raises(AuthenticationFailed) as exc_info:
            await resolver.authenticate(f"Bearer {token}")
        assert exc_info.value.reason == AuthFailureReason.BAD_SIGNATURE

    @pytest.mark.asyncio
    async def test_malformed(self, resolver):
        with pytest.raises(AuthenticationFailed) as exc_info:
            await resolver.authenticate("Bearer not-a-token")
        assert exc_info.value.reason == AuthFailureReason.MALFORMED

    @pytest.mark.asyncio
    async def test_expired(self, resolver, make_user):
        """Both past-exp and too-old tokens report EXPIRED."""
        past = datetime.now(timezone.utc) - timedelta(days=8)
        old = TokenService(TEST_JWT_SECRET, clock=lambda: past)
        token = old.issue(make_user().to_identity())
        with pytest.raises(AuthenticationFailed) as exc_info:
            await resolver.authenticate(f"Bearer {token}")
        assert exc_info.value.reason == AuthFailureReason.EXPIRED

    @pytest.mark.asyncio
    async def test_optional_resolution(self, resolver):
        """Non-required mode turns failures into None."""
        assert await resolver.resolve(None, required=False) is None
        assert await resolver.resolve("Bearer junk", required=False) is None
        with pytest.raises(AuthenticationFailed):
            await resolver.resolve("Bearer junk")

    def test_store_mode_needs_repository(self, token_service):
        with pytest.raises(ValueError):
            AuthenticationResolver(token_service)


class TestClaimsLookup:
    @pytest.mark.asyncio
    async def test_trusts_claims(self, token_service, make_user):
        """No store read; the identity is whatever was signed."""
        resolver = AuthenticationResolver(token_service, lookup_mode=UserLookupMode.CLAIMS)
        user = make_user(role=UserRole.VENUE_OWNER)
        identity = await resolver.authenticate(f"Bearer {token_service.issue(user.to_identity())}")
        assert identity == user.to_identity()
        assert resolver.lookup_mode == UserLookupMode.CLAIMS
