"""
Admin service.

Aggregates registration counts and the latest registrants for the
event dashboard.
"""

from modules.stamps.repository import (
    RegistrantRepository,
    STAMPS_COLLECTION,
    USERS_COLLECTION,
)

from .models import AdminSummary, RecentRegistrant

RECENT_LIMIT = 10


class AdminService:
    """Builds the admin summary from the registrant collections."""

    def __init__(self, repository: RegistrantRepository):
        self._repository = repository

    async def get_summary(self, limit: int = RECENT_LIMIT) -> AdminSummary:
        """Totals plus the most recent registrants, newest first."""
        recent = [
            RecentRegistrant.model_validate({**data, "id": user_id})
            for user_id, data in self._repository.list_recent_users(limit)
        ]
        return AdminSummary(
            total_users=self._repository.count_documents(USERS_COLLECTION),
            total_stamp_cards=self._repository.count_documents(STAMPS_COLLECTION),
            recent_submissions=recent,
        )
