"""
Admin module.

Read-only registration statistics for event staff.
"""

from .models import AdminSummary, RecentRegistrant
from .service import AdminService

__all__ = [
    "AdminSummary",
    "RecentRegistrant",
    "AdminService",
]
