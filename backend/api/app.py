"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from modules.auth.routes import router as auth_router
from modules.users import seed_admin_user

from .dependencies import get_container
from .errors import register_exception_handlers
from .middleware.rate_limit import api_rate_limit
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Seeds the admin account (when configured) before serving requests.
    """
    # Startup
    container = get_container()
    settings = container.settings
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(environment={settings.environment.value}, persistence={settings.persistence_mode.value})"
    )
    await seed_admin_user(container.users, container.passwords, settings)
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_container().settings

    app = FastAPI(
        title=settings.app_name,
        description="Authentication and access control for the MaBar venue-booking backend",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(
        health.router,
        prefix="/api",
        tags=["health"],
        dependencies=[Depends(api_rate_limit)],
    )

    return app


# Application instance for uvicorn
app = create_app()
