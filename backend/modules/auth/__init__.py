"""
Authentication module.

Handles credential checks, session issuance, bearer token resolution and
role selection.

Public API:
- IAuthService / AuthService: register, login, admin_login,
  login_with_google_token, login_with_google, select_role, change_password
- AuthenticationResolver: bearer header -> AuthenticatedUser
- GoogleTokenVerifier: Google ID token -> GoogleProfile
- Auth exceptions: AuthenticationFailed, InvalidCredentialsError, InvalidRoleError, ...
"""

from .interfaces import IAuthService
from .google import GoogleTokenVerifier
from .resolver import AuthenticationResolver, extract_bearer_token
from .service import AuthService
from .models import (
    AuthResponse,
    AuthResult,
    AuthStatusResponse,
    ChangePasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    MeResponse,
    MessageResponse,
    RegisterRequest,
    RoleSelectionRequest,
    UserSummary,
)
from .exceptions import (
    AuthFailureReason,
    AuthenticationFailed,
    GoogleSignInDisabledError,
    InvalidCredentialsError,
    InvalidGoogleTokenError,
    InvalidRoleError,
    LoginFailureReason,
    MissingTokenError,
    RoleNotAssignableError,
)

__all__ = [
    # Interface
    "IAuthService",
    "AuthService",
    "AuthenticationResolver",
    "extract_bearer_token",
    "GoogleTokenVerifier",
    # Models
    "AuthResponse",
    "AuthResult",
    "AuthStatusResponse",
    "ChangePasswordRequest",
    "GoogleLoginRequest",
    "LoginRequest",
    "MeResponse",
    "MessageResponse",
    "RegisterRequest",
    "RoleSelectionRequest",
    "UserSummary",
    # Exceptions
    "AuthFailureReason",
    "AuthenticationFailed",
    "GoogleSignInDisabledError",
    "InvalidCredentialsError",
    "InvalidGoogleTokenError",
    "InvalidRoleError",
    "LoginFailureReason",
    "MissingTokenError",
    "RoleNotAssignableError",
]
