"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.exceptions import ConfigurationError

from .dependencies import get_container
from .errors import register_exception_handlers
from .routes import health
from modules.admin.routes import router as admin_router
from modules.registration.routes import router as registration_router
from modules.stamps.routes import router as stamps_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Builds the Firestore client up front so a bad setup shows in the logs
    at startup. The app still starts; store-backed requests then answer
    500 CONFIGURATION_ERROR.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    try:
        get_container().firestore
    except ConfigurationError as e:
        logger.error("Firestore is not configured: %s", e.message)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Conference stamp card registration API",
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
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(registration_router, prefix="/api", tags=["registration"])
    app.include_router(stamps_router, prefix="/api", tags=["stamps"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
