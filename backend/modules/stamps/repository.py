"""
Registrant repository for database access.

Encapsulates all Firestore reads and writes for the two registrant
collections, both keyed by the registrant identifier:
- users: one document per registrant
- stamps: the registrant's stamp card

plus the submissions audit collection fed by the FormSG middleman.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from shared.exceptions import StorageError
from shared.repository import BaseRepository
from .exceptions import StampCardNotFoundError
from .models import StampCard, StampSlot, mark_slot

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
STAMPS_COLLECTION = "stamps"
SUBMISSIONS_COLLECTION = "submissions"


class RegistrantRepository(BaseRepository[StampCard]):
    """
    Repository for users and their stamp cards.

    User documents are returned as plain dicts (their shape differs between
    the nickname and webhook flows); stamp cards are mapped to StampCard.

    Note: This repository does NOT validate identifiers or booth ids.
    The service layer is responsible for rejecting bad input first.
    """

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def create_registrant(
        self,
        user_id: str,
        user_data: dict[str, Any],
        stamps: list[StampSlot],
        now: datetime,
    ) -> StampCard:
        """
        Create a user and their stamp card in a single batch.

        Args:
            user_id: New registrant identifier (document id in both collections).
            user_data: Fields for the user document.
            stamps: Initial stamp slots.
            now: Creation time for the stamp card.

        Returns:
            The stored StampCard.
        """
        card = StampCard(
            user_id=user_id,
            stamps=stamps,
            created_at=now,
            last_updated=now,
        )

        with self.storage_errors("create_registrant"):
            batch = self._db.batch()
            batch.set(self._db.collection(USERS_COLLECTION).document(user_id), user_data)
            batch.set(self._db.collection(STAMPS_COLLECTION).document(user_id), card.to_document())
            batch.commit()

        return card

    def find_user_by_field(self, field: str, value: str) -> Optional[tuple[str, dict[str, Any]]]:
        """
        Find the first user whose field equals value.

        Returns:
            (user_id, user_data) or None when nobody matches.
        """
        with self.storage_errors("find_user_by_field"):
            query = (
                self._db.collection(USERS_COLLECTION)
                .where(filter=FieldFilter(field, "==", value))
                .limit(1)
            )
            for snapshot in query.stream():
                return snapshot.id, snapshot.to_dict() or {}
        return None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_user(self, user_id: str) -> Optional[dict[str, Any]]:
        """Get a user document, or None if it does not exist."""
        with self.storage_errors("get_user"):
            snapshot = self._db.collection(USERS_COLLECTION).document(user_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def get_stamp_card(self, user_id: str) -> Optional[StampCard]:
        """Get a stamp card, or None if it does not exist."""
        with self.storage_errors("get_stamp_card"):
            snapshot = self._db.collection(STAMPS_COLLECTION).document(user_id).get()
        if not snapshot.exists:
            return None
        return self._map_to_stamp_card(user_id, snapshot.to_dict() or {})

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def touch_user(self, user_id: str, now: datetime) -> None:
        """Record activity on a user."""
        with self.storage_errors("touch_user"):
            self._db.collection(USERS_COLLECTION).document(user_id).update({"lastActive": now})

    def mark_booth(self, user_id: str, booth_id: str, now: datetime) -> list[StampSlot]:
        """
        Fill one booth slot and touch the user, atomically.

        Runs in a Firestore transaction: the stamp card is read inside the
        transaction, so if another scan for the same registrant commits
        first, Firestore retries this one against the fresh card and no
        update is lost.

        Returns:
            The updated stamps.

        Raises:
            StampCardNotFoundError: If the stamp card does not exist
            InvalidBoothError: If booth_id is not a known booth
            AlreadyMarkedError: If the booth was already stamped
        """
        stamp_ref = self._db.collection(STAMPS_COLLECTION).document(user_id)
        user_ref = self._db.collection(USERS_COLLECTION).document(user_id)

        @firestore.transactional
        def mark_in_transaction(transaction) -> list[StampSlot]:
            snapshot = stamp_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise StampCardNotFoundError(user_id)

            card = self._map_to_stamp_card(user_id, snapshot.to_dict() or {})
            updated = mark_slot(card.stamps, booth_id, now)

            transaction.update(stamp_ref, {
                "stamps": [slot.to_document() for slot in updated],
                "lastUpdated": now,
            })
            transaction.update(user_ref, {"lastActive": now})
            return updated

        with self.storage_errors("mark_booth"):
            try:
                return mark_in_transaction(self._db.transaction())
            except ValueError as e:
                # Raised by the client once every commit attempt has been contended
                logger.exception("Firestore mark_booth transaction gave up")
                raise StorageError(operation="mark_booth", details={"cause": str(e)}) from e

    def save_submission(self, submission_id: str, data: dict[str, Any]) -> None:
        """Store (or overwrite) a submission audit record."""
        with self.storage_errors("save_submission"):
            self._db.collection(SUBMISSIONS_COLLECTION).document(submission_id).set(data)

    # -------------------------------------------------------------------------
    # Admin and health
    # -------------------------------------------------------------------------

    def count_documents(self, collection: str) -> int:
        """Count the documents in a collection."""
        with self.storage_errors("count_documents"):
            results = self._db.collection(collection).count().get()
        return int(results[0][0].value) if results else 0

    def list_recent_users(self, limit: int = 10) -> list[tuple[str, dict[str, Any]]]:
        """List the most recently created users, newest first."""
        with self.storage_errors("list_recent_users"):
            query = (
                self._db.collection(USERS_COLLECTION)
                .order_by("createdAt", direction=firestore.Query.DESCENDING)
                .limit(limit)
            )
            return [(snapshot.id, snapshot.to_dict() or {}) for snapshot in query.stream()]

    def probe(self) -> None:
        """Issue a minimal read against both collections. Raises StorageError."""
        with self.storage_errors("probe"):
            for collection in (USERS_COLLECTION, STAMPS_COLLECTION):
                list(self._db.collection(collection).limit(1).stream())

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_stamp_card(self, user_id: str, data: dict[str, Any]) -> StampCard:
        """Map a stamps document to a StampCard model."""
        return StampCard(
            user_id=data.get("userId") or user_id,
            stamps=[StampSlot.model_validate(slot) for slot in data.get("stamps", [])],
            created_at=data.get("createdAt"),
            last_updated=data.get("lastUpdated"),
        )
