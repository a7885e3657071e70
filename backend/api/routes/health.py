"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from shared.exceptions import MabarError

from ..dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    persistence: str
    user_store: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Probes the user store with a lookup that matches nothing.
    """
    container = get_container()
    mode = container.settings.persistence_mode.value
    try:
        await container.users.find_by_id("00000000-0000-0000-0000-000000000000")
    except (MabarError, RuntimeError) as e:
        logger.warning(f"Readiness probe failed: {e}")
        return ReadinessResponse(status="not_ready", persistence=mode, user_store="unavailable")
    return ReadinessResponse(status="ready", persistence=mode, user_store="connected")
