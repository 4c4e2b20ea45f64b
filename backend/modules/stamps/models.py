"""
Stamps module data models.

A stamp card is an ordered list of exactly eleven slots, one per booth.
Slot i always represents booth(i + 1). A slot moves from unfilled to filled
exactly once; filled is terminal.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.models import CamelModel

from .exceptions import AlreadyMarkedError, CorruptStampCardError, InvalidBoothError


BOOTH_COUNT = 11
BOOTH_IDS = [f"booth{i}" for i in range(1, BOOTH_COUNT + 1)]

BOOTH_ID_SYNTAX = re.compile(r"^[a-zA-Z0-9\-_]+$")


class StampSlot(CamelModel):
    """One booth slot on a stamp card."""

    booth_id: str = Field(..., description="booth1..booth11")
    filled: bool = Field(default=False)
    filled_at: Optional[str] = Field(
        default=None,
        description="ISO-8601 time the stamp was collected; set iff filled",
    )


class StampCard(CamelModel):
    """Stamp card document, keyed by the registrant identifier."""

    user_id: str
    stamps: list[StampSlot]
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class UserInfo(CamelModel):
    """Projection of a user returned alongside the stamp card."""

    nickname: Optional[str] = None
    last_active: Optional[datetime] = None


class StampCardResponse(CamelModel):
    """Response for GET /api/get-stamp."""

    success: bool = True
    stamps: list[StampSlot]
    completed: int = Field(default=0, description="Number of filled slots")
    user: UserInfo


class MarkStampResponse(CamelModel):
    """Response for POST /api/mark-stamp."""

    success: bool = True
    stamps: list[StampSlot]
    completed: int = Field(default=0, description="Number of filled slots")
    message: str


def new_stamp_slots() -> list[StampSlot]:
    """Create the eleven unfilled slots of a fresh stamp card."""
    return [StampSlot(booth_id=booth_id) for booth_id in BOOTH_IDS]


def is_valid_booth_syntax(booth_id: object) -> bool:
    """Check a booth identifier against the allowed character set."""
    return isinstance(booth_id, str) and BOOTH_ID_SYNTAX.fullmatch(booth_id) is not None


def booth_index(booth_id: str) -> int:
    """
    Get the slot index for a booth identifier.

    Raises:
        InvalidBoothError: If the id is not one of booth1..booth11
    """
    try:
        return BOOTH_IDS.index(booth_id)
    except ValueError:
        raise InvalidBoothError(booth_id)


def mark_slot(
    stamps: list[StampSlot],
    booth_id: str,
    now: datetime,
) -> list[StampSlot]:
    """
    Fill one booth slot and return the new stamps list.

    The input list is not modified. Slots other than the target are
    carried over as-is.

    Args:
        stamps: Current stamps in booth order
        booth_id: Booth to mark
        now: Time recorded as filledAt

    Returns:
        A new list with the target slot filled

    Raises:
        InvalidBoothError: If booth_id is not a known booth
        AlreadyMarkedError: If the slot is already filled (carries the
            unchanged stamps)
    """
    index = booth_index(booth_id)
    if len(stamps) != BOOTH_COUNT or stamps[index].booth_id != booth_id:
        raise CorruptStampCardError(booth_id, index)
    slot = stamps[index]

    if slot.filled:
        raise AlreadyMarkedError(booth_id, stamps)

    updated = list(stamps)
    updated[index] = StampSlot(
        booth_id=booth_id,
        filled=True,
        filled_at=now.isoformat(),
    )
    return updated


def completed_count(stamps: list[StampSlot]) -> int:
    """Number of filled slots."""
    return sum(1 for slot in stamps if slot.filled)


def is_complete(stamps: list[StampSlot]) -> bool:
    """Whether every booth has been stamped."""
    return len(stamps) == BOOTH_COUNT and completed_count(stamps) == BOOTH_COUNT
