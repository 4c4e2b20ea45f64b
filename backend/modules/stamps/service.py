"""
Stamps service implementation with Firestore.

Validates input before touching the store, then reads or marks the
registrant's stamp card through RegistrantRepository.
"""

import logging
from typing import Any

from shared.identifiers import is_valid_identifier
from shared.timestamps import utc_now

from .interfaces import IStampService
from .models import (
    MarkStampResponse,
    StampCardResponse,
    UserInfo,
    booth_index,
    completed_count,
    is_complete,
    is_valid_booth_syntax,
)
from .exceptions import (
    InvalidBoothError,
    InvalidIdentifierError,
    StampCardNotFoundError,
    UserNotFoundError,
)
from .repository import RegistrantRepository

logger = logging.getLogger(__name__)


def display_name(user: dict[str, Any]) -> str | None:
    """Nickname for nickname-flow users, else the webhook name or email."""
    return user.get("nickname") or user.get("name") or user.get("email")


class StampService(IStampService):
    """
    Stamp service with Firestore backend.

    Implements IStampService protocol with real database operations.
    """

    def __init__(self, repository: RegistrantRepository):
        self._repository = repository

    async def get_stamps(self, user_id: str) -> StampCardResponse:
        """Get a stamp card and touch the user."""
        if not is_valid_identifier(user_id):
            raise InvalidIdentifierError(user_id)

        user = self._repository.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        card = self._repository.get_stamp_card(user_id)
        if card is None:
            logger.warning("User %s has no stamp card", user_id)
            raise StampCardNotFoundError(user_id)

        now = utc_now()
        self._repository.touch_user(user_id, now)

        return StampCardResponse(
            stamps=card.stamps,
            completed=completed_count(card.stamps),
            user=UserInfo(nickname=display_name(user), last_active=now),
        )

    async def mark_stamp(self, user_id: str, booth_id: str) -> MarkStampResponse:
        """Mark one booth as stamped."""
        if not is_valid_identifier(user_id):
            raise InvalidIdentifierError(user_id)
        if not is_valid_booth_syntax(booth_id):
            raise InvalidBoothError(booth_id)

        if self._repository.get_user(user_id) is None:
            raise UserNotFoundError(user_id)

        card = self._repository.get_stamp_card(user_id)
        if card is None:
            logger.warning("User %s has no stamp card", user_id)
            raise StampCardNotFoundError(user_id)

        booth_index(booth_id)  # InvalidBoothError outside booth1..booth11

        stamps = self._repository.mark_booth(user_id, booth_id, utc_now())
        logger.info("Marked %s for %s", booth_id, user_id)
        if is_complete(stamps):
            logger.info("User %s completed their stamp card", user_id)

        return MarkStampResponse(
            stamps=stamps,
            completed=completed_count(stamps),
            message=f"Stamp collected for {booth_id}",
        )
