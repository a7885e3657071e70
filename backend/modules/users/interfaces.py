"""
User store interface.

The auth core depends on IUserRepository, never on a concrete store, so the
Supabase table and the in-memory development store are interchangeable.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import User


@runtime_checkable
class IUserRepository(Protocol):
    """Document-store operations on User."""

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Return the user with this ID, or None."""
        ...

    async def find_by_email(self, email: str) -> Optional[User]:
        """Return the user with this (normalized) email, or None."""
        ...

    async def find_by_google_id(self, google_id: str) -> Optional[User]:
        """Return the user linked to this Google account, or None."""
        ...

    async def insert(self, user: User) -> User:
        """
        Store a new user.

        Raises:
            EmailAlreadyRegisteredError: the email is taken
        """
        ...

    async def update(self, user_id: str, updates: dict[str, Any]) -> User:
        """
        Apply a partial update and bump updated_at.

        Raises:
            UserNotFoundError: no user with this ID
        """
        ...
