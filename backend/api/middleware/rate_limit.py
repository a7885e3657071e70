"""
Rate limiting dependencies.

Keys requests by client IP and raises RateLimitExceededError (429) once the
limiter's window is full.
"""

import logging

from fastapi import Request

from shared.exceptions import RateLimitExceededError

from ..dependencies import get_container
from .auth import client_ip

logger = logging.getLogger(__name__)


async def auth_rate_limit(request: Request) -> None:
    """Guard for credential endpoints (login, register, OAuth)."""
    key = client_ip(request)
    if not get_container().auth_limiter.check(key):
        logger.warning(f"Auth rate limit exceeded: ip={key} path={request.url.path}")
        raise RateLimitExceededError(key)


async def api_rate_limit(request: Request) -> None:
    """Guard for general API routes."""
    key = client_ip(request)
    if not get_container().api_limiter.check(key):
        logger.warning(f"API rate limit exceeded: ip={key} path={request.url.path}")
        raise RateLimitExceededError(key)
