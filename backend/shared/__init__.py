"""
Shared infrastructure for the Stamp Card backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Firestore client factory
- exceptions: Base exception classes
- identifiers: UUID v4 generation and validation

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import create_firestore_client
from .exceptions import (
    StampCardError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ConfigurationError,
    StorageError,
    DecryptionError,
)
from .identifiers import new_identifier, is_valid_identifier

__all__ = [
    "Settings",
    "get_settings",
    "create_firestore_client",
    "StampCardError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "ConfigurationError",
    "StorageError",
    "DecryptionError",
    "new_identifier",
    "is_valid_identifier",
]
