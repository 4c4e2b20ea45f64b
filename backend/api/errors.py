"""
Exception handlers.

Maps the shared exception taxonomy onto HTTP responses:

    ValidationError      400
    AuthenticationError  401
    NotFoundError        404
    ConflictError        409
    ConfigurationError   500 (code CONFIGURATION_ERROR)
    StorageError         500 (code STORAGE_ERROR)

Server-side failures are logged in full; callers get a generic message
and no details unless the app runs in debug mode.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    StampCardError,
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from modules.stamps.exceptions import AlreadyMarkedError

from .models.errors import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

STATUS_CODES: list[tuple[type[StampCardError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
]

GENERIC_MESSAGE = "Internal server error"


def status_code_for(error: StampCardError) -> int:
    """HTTP status for an exception, 500 when nothing more specific applies."""
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


def error_body(error: StampCardError, debug: bool) -> dict:
    """Render an exception as the JSON error body."""
    status_code = status_code_for(error)

    if status_code < 500 or debug:
        body = ErrorResponse(error=error.code, message=error.message, details=error.details)
    elif isinstance(error, ConfigurationError):
        body = ErrorResponse(error=error.code, message="Service is not configured")
    else:
        body = ErrorResponse(error=error.code, message=GENERIC_MESSAGE)

    content = body.model_dump(exclude_none=True)
    if isinstance(error, AlreadyMarkedError):
        content["stamps"] = [slot.to_document() for slot in error.stamps]
    return content


async def handle_stamp_card_error(request: Request, exc: StampCardError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(
            "%s %s failed: %s %s",
            request.method,
            request.url.path,
            exc.code,
            exc.details,
        )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_body(exc, get_settings().debug)),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ValidationErrorResponse.from_errors(jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else GENERIC_MESSAGE
    body = ErrorResponse(error="INTERNAL_ERROR", message=message)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on an app."""
    app.add_exception_handler(StampCardError, handle_stamp_card_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
