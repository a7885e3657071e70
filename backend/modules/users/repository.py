"""
User repositories.

SupabaseUserRepository stores users in the Supabase users table.
InMemoryUserRepository keeps them in process memory; it backs the explicit
PERSISTENCE_MODE=memory development mode and the test suite.
"""

import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import TypeAdapter
from supabase import Client, PostgrestAPIError

from shared.exceptions import ExternalServiceError
from shared.repository import BaseRepository

from .exceptions import EmailAlreadyRegisteredError, UserNotFoundError
from .models import User, normalize_email

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
_ROW_ADAPTER = TypeAdapter(dict[str, Any])


class SupabaseUserRepository(BaseRepository[User]):
    """
    Repository for the users table.

    The Supabase client is synchronous, so each query runs in a worker
    thread to keep the event loop free.
    """

    def __init__(self, db: Client, table: str = "users") -> None:
        super().__init__(db)
        self._table = table

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self._find_one("id", user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._find_one("email", normalize_email(email))

    async def find_by_google_id(self, google_id: str) -> Optional[User]:
        return await self._find_one("google_id", google_id)

    async def insert(self, user: User) -> User:
        query = self._db.table(self._table).insert(user.model_dump(mode="json"))
        try:
            result = await asyncio.to_thread(query.execute)
        except PostgrestAPIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise EmailAlreadyRegisteredError(user.email)
            raise self._store_error("insert", e)
        return self._map_to_user(result.data[0])

    async def update(self, user_id: str, updates: dict[str, Any]) -> User:
        data = {**updates, "updated_at": datetime.now(timezone.utc)}
        row = _ROW_ADAPTER.dump_python(data, mode="json")
        query = self._db.table(self._table).update(row).eq("id", user_id)
        try:
            result = await asyncio.to_thread(query.execute)
        except PostgrestAPIError as e:
            raise self._store_error("update", e)
        if not result.data:
            raise UserNotFoundError(user_id)
        return self._map_to_user(result.data[0])

    async def _find_one(self, column: str, value: str) -> Optional[User]:
        query = self._db.table(self._table).select("*").eq(column, value).limit(1)
        try:
            result = await asyncio.to_thread(query.execute)
        except PostgrestAPIError as e:
            raise self._store_error(f"find by {column}", e)
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User.model_validate(data)

    def _store_error(self, operation: str, error: PostgrestAPIError) -> ExternalServiceError:
        logger.error(f"Supabase users {operation} failed: {error.message}")
        return ExternalServiceError(
            f"User store {operation} failed",
            service="supabase",
            details={"code": error.code},
        )


class InMemoryUserRepository:
    """
    Process-local user store.

    Stored models are copied on the way in and out, so callers never share
    a mutable instance with the store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._by_email: dict[str, str] = {}
        self._by_google_id: dict[str, str] = {}

    async def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    async def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._by_email.get(normalize_email(email))
            return self._users[user_id].model_copy() if user_id else None

    async def find_by_google_id(self, google_id: str) -> Optional[User]:
        with self._lock:
            user_id = self._by_google_id.get(google_id)
            return self._users[user_id].model_copy() if user_id else None

    async def insert(self, user: User) -> User:
        with self._lock:
            if user.email in self._by_email:
                raise EmailAlreadyRegisteredError(user.email)
            stored = user.model_copy()
            self._users[stored.id] = stored
            self._index(stored)
            return stored.model_copy()

    async def update(self, user_id: str, updates: dict[str, Any]) -> User:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                raise UserNotFoundError(user_id)
            updated = User.model_validate({
                **current.model_dump(),
                **updates,
                "updated_at": datetime.now(timezone.utc),
            })
            if updated.email != current.email and updated.email in self._by_email:
                raise EmailAlreadyRegisteredError(updated.email)
            self._by_email.pop(current.email, None)
            if current.google_id:
                self._by_google_id.pop(current.google_id, None)
            self._users[user_id] = updated
            self._index(updated)
            return updated.model_copy()

    def clear(self) -> None:
        with self._lock:
            self._users.clear()
            self._by_email.clear()
            self._by_google_id.clear()

    def _index(self, user: User) -> None:
        self._by_email[user.email] = user.id
        if user.google_id:
            self._by_google_id[user.google_id] = user.id
