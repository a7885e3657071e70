"""
Authentication API endpoints.

Mounted under /auth. Endpoints that check a password or an external token
share the auth rate limiter; the rest use the general API limiter. Errors
raised by the service are translated in api/errors.py.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user, get_optional_user
from api.middleware.rate_limit import api_rate_limit, auth_rate_limit
from modules.passwords import PasswordRequirements
from modules.users import UserNotFoundError
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    AuthResponse,
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

logger = logging.getLogger(__name__)

router = APIRouter()

AUTH_LIMITED = [Depends(auth_rate_limit)]
API_LIMITED = [Depends(api_rate_limit)]


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=201,
    dependencies=AUTH_LIMITED,
)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create a local account and sign it in."""
    result = await service.register(request)
    return AuthResponse.from_result("User registered successfully", result)


@router.post("/login", response_model=AuthResponse, dependencies=AUTH_LIMITED)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    result = await service.login(request.email, request.password)
    return AuthResponse.from_result("Login successful", result)


@router.post("/admin/login", response_model=AuthResponse, dependencies=AUTH_LIMITED)
async def admin_login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Same as /login, but any non-admin account gets a 401."""
    result = await service.admin_login(request.email, request.password)
    return AuthResponse.from_result("Admin login successful", result)


@router.post("/oauth/google", response_model=AuthResponse, dependencies=AUTH_LIMITED)
async def google_login(
    request: GoogleLoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Sign in with a Google ID token.

    The token is verified against Google's signing keys and GOOGLE_CLIENT_ID
    before the account is linked or created.
    """
    result = await service.login_with_google_token(request.id_token)
    return AuthResponse.from_result("Google login successful", result)


@router.post("/logout", response_model=MessageResponse, dependencies=API_LIMITED)
async def logout() -> MessageResponse:
    """
    Tokens are stateless; the client discards its copy.
    """
    return MessageResponse(message="Logout successful")


@router.get("/status", response_model=AuthStatusResponse, dependencies=API_LIMITED)
async def auth_status(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: IAuthService = Depends(get_auth_service),
) -> AuthStatusResponse:
    """Report whether the caller is signed in. Never fails."""
    if user is None:
        return AuthStatusResponse(is_authenticated=False)
    try:
        record = await service.get_user(user.id)
    except UserNotFoundError:
        return AuthStatusResponse(is_authenticated=False)
    except ExternalServiceError:
        logger.exception(f"User lookup failed while reporting status: id={user.id}")
        return AuthStatusResponse(is_authenticated=False)
    return AuthStatusResponse(is_authenticated=True, user=UserSummary.from_user(record))


@router.get("/me", response_model=MeResponse, dependencies=API_LIMITED)
async def me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MeResponse:
    record = await service.get_user(user.id)
    return MeResponse(user=UserSummary.from_user(record))


@router.post("/role", response_model=AuthResponse, dependencies=API_LIMITED)
async def select_role(
    request: RoleSelectionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Choose player or venue_owner.

    The response carries a fresh token; the old one still names the
    previous role until it expires.
    """
    result = await service.select_role(user, request.role)
    return AuthResponse.from_result("Role updated successfully", result)


@router.post("/password", response_model=MessageResponse, dependencies=AUTH_LIMITED)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    await service.change_password(user, request)
    return MessageResponse(message="Password changed successfully")


@router.get("/password-policy", response_model=PasswordRequirements, dependencies=API_LIMITED)
async def password_policy(
    service: IAuthService = Depends(get_auth_service),
) -> PasswordRequirements:
    """Rules the client can check before submitting a password."""
    return service.password_requirements()
