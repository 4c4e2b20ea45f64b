"""
Base exception classes for the Stamp Card backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code, so modules only
need to pick the right parent.
"""

from typing import Optional, Any


class StampCardError(Exception):
    """
    Base exception for all Stamp Card errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(StampCardError):
    """Resource not found."""

    pass


class ValidationError(StampCardError):
    """Input validation failed."""

    pass


class ConflictError(StampCardError):
    """Request conflicts with the current state of a resource."""

    pass


class AuthenticationError(StampCardError):
    """Authentication failed (invalid or missing signature)."""

    pass


class ConfigurationError(StampCardError):
    """
    The service is not set up correctly.

    Raised for missing or malformed store credentials. Operators should see
    a distinct code so a setup problem is not mistaken for a transient outage.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class StorageError(StampCardError):
    """Error reading from or writing to the document store."""

    def __init__(
        self,
        message: str = "Document store request failed",
        operation: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code="STORAGE_ERROR", details=details)
        self.operation = operation
        if operation:
            self.details["operation"] = operation


class DecryptionError(StampCardError):
    """
    Payload decryption failed.

    Always recovered locally by the webhook flow; never reaches a caller.
    """

    def __init__(self, reason: str):
        super().__init__(
            f"Failed to decrypt payload: {reason}",
            code="DECRYPTION_FAILED",
            details={"reason": reason},
        )
