"""
Stamps module interface.

The API layer depends on IStampService for stamp card reads and booth marks.
"""

from typing import Protocol, runtime_checkable

from .models import StampCardResponse, MarkStampResponse


@runtime_checkable
class IStampService(Protocol):
    """
    Interface for stamp card operations.

    This protocol defines the contract that the stamps module exposes
    to the API layer.
    """

    async def get_stamps(self, user_id: str) -> StampCardResponse:
        """
        Get a registrant's stamp card.

        Touches the user's lastActive timestamp.

        Args:
            user_id: Registrant identifier (UUID v4)

        Returns:
            The stamps in booth order plus a small user projection

        Raises:
            InvalidIdentifierError: If user_id is not a UUID v4
            UserNotFoundError: If the user does not exist
            StampCardNotFoundError: If the user has no stamp card
        """
        ...

    async def mark_stamp(self, user_id: str, booth_id: str) -> MarkStampResponse:
        """
        Collect the stamp for one booth.

        Args:
            user_id: Registrant identifier (UUID v4)
            booth_id: Booth identifier, booth1..booth11

        Returns:
            The full updated stamps and a confirmation message

        Raises:
            InvalidIdentifierError: If user_id is not a UUID v4
            InvalidBoothError: If booth_id is malformed or unknown
            UserNotFoundError: If the user does not exist
            StampCardNotFoundError: If the user has no stamp card
            AlreadyMarkedError: If the booth was already stamped
        """
        ...
