"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Any, Optional


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: str
    message: str
    details: Optional[dict[str, Any]] = None


class ValidationErrorResponse(ErrorResponse):
    """Request validation error response format."""

    error: str = "VALIDATION_ERROR"
    message: str = "Invalid request"
    details: Optional[dict[str, Any]] = None

    @classmethod
    def from_errors(cls, errors: list[dict[str, Any]]) -> "ValidationErrorResponse":
        return cls(details={"errors": errors})
