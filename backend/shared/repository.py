"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Firestore client access and the translation of store failures into
StorageError.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, TypeVar, Generic

from google.api_core.exceptions import GoogleAPICallError, RetryError
from google.cloud.firestore import Client

from .exceptions import StorageError


T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Firestore client access via self._db
    - storage_errors() context manager that logs store failures in full
      and re-raises them as StorageError with a generic message

    Subclasses should implement domain-specific data access methods
    and handle document-to-model mapping internally.

    Example:
        class RegistrantRepository(BaseRepository[dict]):
            def get_user(self, user_id: str) -> Optional[dict]:
                with self.storage_errors("get_user"):
                    snapshot = self._db.collection("users").document(user_id).get()
                return snapshot.to_dict() if snapshot.exists else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Firestore client.

        Args:
            db: Firestore client instance for database operations.
        """
        self._db = db

    @contextmanager
    def storage_errors(self, operation: str) -> Iterator[None]:
        """Convert store exceptions raised inside the block into StorageError."""
        try:
            yield
        except (GoogleAPICallError, RetryError) as e:
            logger.exception("Firestore %s failed", operation)
            raise StorageError(
                operation=operation,
                details={"cause": str(e)},
            ) from e
