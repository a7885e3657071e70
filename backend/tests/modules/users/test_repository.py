"""Tests for modules/users/repository.py."""

import pytest
from unittest.mock import MagicMock

from supabase import PostgrestAPIError

from modules.users import (
    EmailAlreadyRegisteredError,
    SupabaseUserRepository,
    User,
    UserNotFoundError,
)
from shared.exceptions import ExternalServiceError
from shared.models import UserRole


def user_row(**overrides) -> dict:
    row = {
        "id": "user-123",
        "email": "player@mabar.com",
        "password_hash": "$argon2id$v=19$m=4096,t=2,p=2$c2FsdA$aGFzaA",
        "role": "player",
        "is_active": True,
        "onboarding_completed": False,
        "first_name": "Ana",
        "last_name": None,
        "provider": "local",
        "google_id": None,
        "profile_picture": None,
        "last_login_at": None,
        "created_at": "2026-01-01T00:00:00+00:00",
        "updated_at": "2026-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def api_error(code: str) -> PostgrestAPIError:
    return PostgrestAPIError({"message": "boom", "code": code, "hint": None, "details": None})


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_insert_and_find(self, user_repository):
        user = await user_repository.insert(User(email="Player@MaBar.com"))
        assert (await user_repository.find_by_id(user.id)).email == "player@mabar.com"
        assert (await user_repository.find_by_email("PLAYER@mabar.com")).id == user.id
        assert await user_repository.find_by_google_id("g-1") is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, user_repository):
        await user_repository.insert(User(email="player@mabar.com"))
        with pytest.raises(EmailAlreadyRegisteredError):
            await user_repository.insert(User(email="player@mabar.com"))

    @pytest.mark.asyncio
    async def test_returns_copies(self, user_repository):
        """Mutating a returned model does not change the store."""
        user = await user_repository.insert(User(email="player@mabar.com"))
        found = await user_repository.find_by_id(user.id)
        found.is_active = False
        assert (await user_repository.find_by_id(user.id)).is_active is True

    @pytest.mark.asyncio
    async def test_update_reindexes(self, user_repository):
        user = await user_repository.insert(User(email="player@mabar.com"))
        updated = await user_repository.update(user.id, {"email": "new@mabar.com", "google_id": "g-1"})

        assert updated.updated_at >= user.updated_at
        assert await user_repository.find_by_email("player@mabar.com") is None
        assert (await user_repository.find_by_email("new@mabar.com")).id == user.id
        assert (await user_repository.find_by_google_id("g-1")).id == user.id

    @pytest.mark.asyncio
    async def test_update_validates(self, user_repository):
        """Updates go through the model, so an admin still needs a password."""
        user = await user_repository.insert(User(email="player@mabar.com"))
        with pytest.raises(Exception):  # Pydantic ValidationError
            await user_repository.update(user.id, {"role": UserRole.ADMIN})

    @pytest.mark.asyncio
    async def test_update_missing(self, user_repository):
        with pytest.raises(UserNotFoundError):
            await user_repository.update("missing", {"is_active": False})

    @pytest.mark.asyncio
    async def test_clear(self, user_repository):
        user = await user_repository.insert(User(email="player@mabar.com"))
        user_repository.clear()
        assert await user_repository.find_by_id(user.id) is None


class TestSupabaseUserRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_db):
        return SupabaseUserRepository(mock_db)

    @pytest.mark.asyncio
    async def test_find_by_email(self, repository, mock_db):
        """Emails are normalized before querying."""
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[user_row()])

        user = await repository.find_by_email(" Player@MaBar.com ")

        mock_db.table.assert_called_with("users")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("email", "player@mabar.com")
        assert user.id == "user-123"
        assert user.role == UserRole.PLAYER

    @pytest.mark.asyncio
    async def test_find_missing(self, repository, mock_db):
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[])
        assert await repository.find_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_insert(self, repository, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[user_row()])

        user = await repository.insert(User(id="user-123", email="player@mabar.com"))

        payload = mock_db.table.return_value.insert.call_args[0][0]
        assert payload["email"] == "player@mabar.com"
        assert isinstance(payload["created_at"], str)
        assert user.id == "user-123"

    @pytest.mark.asyncio
    async def test_insert_unique_violation(self, repository, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = api_error("23505")
        with pytest.raises(EmailAlreadyRegisteredError):
            await repository.insert(User(email="player@mabar.com"))

    @pytest.mark.asyncio
    async def test_store_failure(self, repository, mock_db):
        """Other database errors become ExternalServiceError."""
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = api_error("08006")
        with pytest.raises(ExternalServiceError) as exc_info:
            await repository.find_by_id("user-123")
        assert exc_info.value.service == "supabase"

    @pytest.mark.asyncio
    async def test_update(self, repository, mock_db):
        query = mock_db.table.return_value.update.return_value.eq.return_value
        query.execute.return_value = MagicMock(data=[user_row(role="venue_owner")])

        user = await repository.update("user-123", {"role": UserRole.VENUE_OWNER})

        row = mock_db.table.return_value.update.call_args[0][0]
        assert row["role"] == "venue_owner"
        assert isinstance(row["updated_at"], str)
        assert user.role == UserRole.VENUE_OWNER

    @pytest.mark.asyncio
    async def test_update_missing(self, repository, mock_db):
        query = mock_db.table.return_value.update.return_value.eq.return_value
        query.execute.return_value = MagicMock(data=[])
        with pytest.raises(UserNotFoundError):
            await repository.update("missing", {"is_active": False})
