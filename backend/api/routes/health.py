"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from shared.exceptions import ConfigurationError, StorageError

from ..dependencies import ServiceContainer, get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(container: ServiceContainer = Depends(get_container)):
    """
    Readiness check endpoint.

    Runs a read-only probe against both Firestore collections.
    Returns 503 when the store is not configured or not reachable.
    """
    try:
        container.registrant_repository.probe()
    except ConfigurationError:
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", database="not_configured").model_dump(),
        )
    except StorageError:
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", database="unavailable").model_dump(),
        )
    return ReadinessResponse(status="ready", database="connected")
