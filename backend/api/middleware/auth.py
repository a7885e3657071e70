"""
Bearer token authentication dependencies.

Resolves the Authorization header through the AuthenticationResolver and
writes an audit record for every attempt. Failures propagate as
AuthenticationFailed; api/errors.py turns them into a generic 401.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Union

from fastapi import Depends, Header, Request

from modules.auth.exceptions import AuthenticationFailed
from modules.auth.resolver import AuthenticationResolver
from modules.authorization import AuthorizationGate, Permission
from modules.authorization.service import RoleRequirement
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser

from ..dependencies import get_authorization_gate, get_resolver

logger = logging.getLogger(__name__)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _audit(request: Request, outcome: str, **fields: object) -> str:
    extra = " ".join(f"{k}={v}" for k, v in fields.items())
    return (
        f"Authentication {outcome}: path={request.url.path} ip={client_ip(request)} "
        f"at={datetime.now(timezone.utc).isoformat()} {extra}"
    ).rstrip()


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    resolver: AuthenticationResolver = Depends(get_resolver),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    try:
        user = await resolver.authenticate(authorization)
    except AuthenticationFailed as e:
        logger.warning(_audit(request, "failed", reason=e.reason.value))
        raise
    logger.info(_audit(request, "succeeded", user=user.id, role=user.role.value if user.role else None))
    return user


async def get_optional_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    resolver: AuthenticationResolver = Depends(get_resolver),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    An invalid token is treated like no token, and so is a user store
    that cannot be reached.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.email}"}
            return {"message": "Hello, anonymous"}
    """
    if authorization is None:
        return None
    try:
        return await resolver.authenticate(authorization)
    except AuthenticationFailed as e:
        logger.info(_audit(request, "ignored", reason=e.reason.value))
        return None
    except ExternalServiceError:
        logger.exception(_audit(request, "skipped", reason="user_store_unavailable"))
        return None


def require_role(required: RoleRequirement):
    """
    Dependency factory gating an endpoint on a role.

    A single role is a minimum rank; a set of roles requires membership.

    Usage:
        @router.get("/venues/mine")
        async def my_venues(user: AuthenticatedUser = Depends(require_role(UserRole.VENUE_OWNER))):
            ...
    """

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> AuthenticatedUser:
        gate.authorize(user, required)
        return user

    return dependency


def require_permission(permission: Union[Permission, str]):
    """Dependency factory gating an endpoint on a named permission."""

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> AuthenticatedUser:
        gate.require_permission(user, permission)
        return user

    return dependency


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
