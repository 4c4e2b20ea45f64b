"""
Stamps module exceptions.
"""

from typing import TYPE_CHECKING

from shared.exceptions import (
    StampCardError,
    NotFoundError,
    ValidationError,
    ConflictError,
)

if TYPE_CHECKING:
    from .models import StampSlot


class InvalidIdentifierError(ValidationError):
    """Raised when a registrant identifier is missing or not a UUID v4."""

    def __init__(self, user_id: object):
        super().__init__(
            "A valid registrant id is required",
            code="INVALID_ID",
            details={"id": user_id if isinstance(user_id, str) else None},
        )


class InvalidBoothError(ValidationError):
    """Raised when a booth id is malformed or not one of booth1..booth11."""

    def __init__(self, booth_id: object):
        super().__init__(
            f"Unknown booth: {booth_id}",
            code="INVALID_BOOTH",
            details={"booth": booth_id if isinstance(booth_id, str) else None},
        )


class UserNotFoundError(NotFoundError):
    """Raised when no user record exists for an identifier."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"id": user_id},
        )


class StampCardNotFoundError(NotFoundError):
    """
    Raised when a user exists but their stamp card does not.

    Both records are created together, so this indicates a data
    integrity problem. It is reported, never repaired.
    """

    def __init__(self, user_id: str):
        super().__init__(
            f"Stamp card not found: {user_id}",
            code="STAMP_CARD_NOT_FOUND",
            details={"id": user_id},
        )


class AlreadyMarkedError(ConflictError):
    """
    Raised when a booth is scanned again after it was stamped.

    Carries the unchanged stamps so the caller can still render the card.
    """

    def __init__(self, booth_id: str, stamps: "list[StampSlot]"):
        super().__init__(
            f"Stamp already collected for {booth_id}",
            code="ALREADY_MARKED",
            details={"booth": booth_id},
        )
        self.booth_id = booth_id
        self.stamps = stamps


class CorruptStampCardError(StampCardError):
    """Raised when a stored stamp card does not hold booth1..booth11 in order."""

    def __init__(self, booth_id: str, index: int):
        super().__init__(
            "Stamp card is corrupt",
            code="CORRUPT_STAMP_CARD",
            details={"booth": booth_id, "index": index},
        )
