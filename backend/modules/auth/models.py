"""
Authentication module data models.

Request and response bodies for the /auth endpoints.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shared.models import UserRole
from modules.users.models import User


class RegisterRequest(BaseModel):
    """Local account registration."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password; checked against the active policy")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class LoginRequest(BaseModel):
    email: str
    password: str


class GoogleLoginRequest(BaseModel):
    """ID token from Google sign-in on the client."""

    id_token: str = Field(..., min_length=1)


class RoleSelectionRequest(BaseModel):
    role: str = Field(..., description="player or venue_owner")


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


class UserSummary(BaseModel):
    """User data returned to client (no sensitive fields)."""

    id: str
    email: str
    role: Optional[UserRole] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: str
    onboarding_completed: bool = False

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
            name=user.display_name,
            onboarding_completed=user.onboarding_completed,
        )


class AuthResult(BaseModel):
    """A freshly issued token and the user it was issued for."""

    token: str
    user: User
    redirect_to: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserSummary
    redirect_to: str

    @classmethod
    def from_result(cls, message: str, result: AuthResult) -> "AuthResponse":
        return cls(
            message=message,
            token=result.token,
            user=UserSummary.from_user(result.user),
            redirect_to=result.redirect_to,
        )


class AuthStatusResponse(BaseModel):
    is_authenticated: bool
    user: Optional[UserSummary] = None


class MeResponse(BaseModel):
    user: UserSummary
    is_authenticated: bool = True


class MessageResponse(BaseModel):
    message: str
