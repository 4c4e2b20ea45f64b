"""
Admin API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_admin_service
from shared.config import get_settings

from .models import AdminSummary
from .service import AdminService, RECENT_LIMIT

router = APIRouter()


def require_admin_summary() -> None:
    """Hide the summary (404) unless ENABLE_ADMIN_SUMMARY is set."""
    if not get_settings().enable_admin_summary:
        raise HTTPException(status_code=404, detail="Not found")


@router.get(
    "/summary",
    response_model=AdminSummary,
    dependencies=[Depends(require_admin_summary)],
)
async def get_summary(
    limit: int = Query(default=RECENT_LIMIT, ge=1, le=RECENT_LIMIT, description="Recent registrants to list"),
    service: AdminService = Depends(get_admin_service),
) -> AdminSummary:
    """Registration statistics."""
    return await service.get_summary(limit)
