"""
Stamps module.

Owns the eleven-slot stamp card: its model and state transitions, the
Firestore repository for registrants, and the query/mark operations.

Public API:
- IStampService: Interface for stamp card operations
- StampSlot, StampCard: Stamp card models
- RegistrantRepository: Firestore access for users and stamp cards
- Stamp exceptions: AlreadyMarkedError, InvalidBoothError, etc.
"""

from .interfaces import IStampService
from .models import (
    BOOTH_COUNT,
    BOOTH_IDS,
    StampSlot,
    StampCard,
    UserInfo,
    StampCardResponse,
    MarkStampResponse,
    new_stamp_slots,
    mark_slot,
    is_complete,
)
from .exceptions import (
    InvalidIdentifierError,
    InvalidBoothError,
    UserNotFoundError,
    StampCardNotFoundError,
    AlreadyMarkedError,
    CorruptStampCardError,
)
from .repository import RegistrantRepository

__all__ = [
    # Interface
    "IStampService",
    # Models
    "BOOTH_COUNT",
    "BOOTH_IDS",
    "StampSlot",
    "StampCard",
    "UserInfo",
    "StampCardResponse",
    "MarkStampResponse",
    "new_stamp_slots",
    "mark_slot",
    "is_complete",
    # Repository
    "RegistrantRepository",
    # Exceptions
    "InvalidIdentifierError",
    "InvalidBoothError",
    "UserNotFoundError",
    "StampCardNotFoundError",
    "AlreadyMarkedError",
    "CorruptStampCardError",
]
