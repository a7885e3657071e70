"""
User module data models.

The User document is owned by the document store; the auth core only reads
it and applies the mutations defined in modules.auth.service.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
import uuid

from pydantic import BaseModel, Field, field_validator, model_validator

from shared.models import AuthenticatedUser, UserRole


class AuthProvider(str, Enum):
    LOCAL = "local"
    GOOGLE = "google"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(BaseModel):
    """
    A stored user account.

    Admins must have a password hash; OAuth-only admin accounts are not
    supported. A missing role is valid until the user selects one.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    email: str
    password_hash: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: bool = True
    onboarding_completed: bool = False

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    provider: AuthProvider = AuthProvider.LOCAL
    google_id: Optional[str] = None
    profile_picture: Optional[str] = None
    last_login_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)

    @model_validator(mode="after")
    def _admin_requires_password(self) -> "User":
        if self.role == UserRole.ADMIN and not self.password_hash:
            raise ValueError("Admin accounts must have a password")
        return self

    @property
    def display_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or "User"

    def to_identity(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.id, email=self.email, role=self.role)


class GoogleProfile(BaseModel):
    """
    A Google account profile taken from a verified ID token.

    Only profiles whose email Google has verified may sign in.
    """

    google_id: str = Field(..., min_length=1)
    email: str
    email_verified: bool = False
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    picture: Optional[str] = None
