"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import timedelta
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Platform-wide role. Ranking lives in modules.authorization."""

    PLAYER = "player"
    VENUE_OWNER = "venue_owner"
    ADMIN = "admin"


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Populated from token claims (and, in store-backed lookup mode, from the
    live user record) and made available to route handlers via dependency
    injection.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    role: Optional[UserRole] = Field(None, description="Selected role, if any")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }


class TokenLifetime(str, Enum):
    """Supported session token lifetime presets (JWT_EXPIRY)."""

    SEVEN_DAYS = "7d"
    ONE_DAY = "1d"
    ONE_HOUR = "1h"
    FIFTEEN_MINUTES = "15m"

    @property
    def duration(self) -> timedelta:
        return _DURATIONS[self]


_DURATIONS = {
    TokenLifetime.SEVEN_DAYS: timedelta(days=7),
    TokenLifetime.ONE_DAY: timedelta(days=1),
    TokenLifetime.ONE_HOUR: timedelta(hours=1),
    TokenLifetime.FIFTEEN_MINUTES: timedelta(minutes=15),
}
