"""
Authentication module interface.

Routes depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.passwords import PasswordRequirements
from modules.users import GoogleProfile, User

from .models import AuthResult, ChangePasswordRequest, RegisterRequest


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    Implementations raise module exceptions (InvalidCredentialsError,
    WeakPasswordError, ...) and never format client-facing messages.
    """

    async def register(self, request: RegisterRequest) -> AuthResult:
        """Create a local account and return a session token for it."""
        ...

    async def login(self, email: str, password: str) -> AuthResult:
        """Verify email/password and return a session token."""
        ...

    async def admin_login(self, email: str, password: str) -> AuthResult:
        """Like login, but only admins succeed."""
        ...

    async def login_with_google_token(self, id_token: str) -> AuthResult:
        """Verify a Google ID token, then sign in with its profile."""
        ...

    async def login_with_google(self, profile: GoogleProfile) -> AuthResult:
        """Sign in (creating or linking the account) with a verified Google profile."""
        ...

    async def select_role(self, identity: AuthenticatedUser, role: str) -> AuthResult:
        """Set the caller's role; the result carries a token with the new role."""
        ...

    async def change_password(self, identity: AuthenticatedUser, request: ChangePasswordRequest) -> None:
        """Replace the caller's password after checking the current one."""
        ...

    async def get_user(self, user_id: str) -> User:
        """Load a user or raise UserNotFoundError."""
        ...

    def password_requirements(self) -> PasswordRequirements:
        """The active policy's client-visible rules."""
        ...
