"""
Admin module data models.
"""

from datetime import datetime
from typing import Optional

from shared.models import CamelModel


class RecentRegistrant(CamelModel):
    """One row of the recent registrations list."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    nickname: Optional[str] = None
    created_at: Optional[datetime] = None
    form_id: Optional[str] = None
    submission_id: Optional[str] = None


class AdminSummary(CamelModel):
    """Response for GET /api/admin/summary."""

    total_users: int
    total_stamp_cards: int
    recent_submissions: list[RecentRegistrant]
