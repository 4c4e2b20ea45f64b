"""
Stamp card API endpoints.

Query-string based so the URLs encoded in booth QR codes
(/stamps?id=<uuid>&booth=<boothId>) map directly onto these calls.
Errors are raised as module exceptions and rendered by the app's
exception handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_stamp_service

from .interfaces import IStampService
from .models import StampCardResponse, MarkStampResponse

router = APIRouter()


@router.get("/get-stamp", response_model=StampCardResponse)
async def get_stamp(
    user_id: Optional[str] = Query(default=None, alias="id", description="Registrant id"),
    service: IStampService = Depends(get_stamp_service),
) -> StampCardResponse:
    """
    Get a registrant's stamp card.

    Returns the eleven slots in booth order and the registrant's nickname.
    """
    return await service.get_stamps(user_id)


@router.post("/mark-stamp", response_model=MarkStampResponse)
async def mark_stamp(
    user_id: Optional[str] = Query(default=None, alias="id", description="Registrant id"),
    booth: Optional[str] = Query(default=None, description="Booth id, booth1..booth11"),
    service: IStampService = Depends(get_stamp_service),
) -> MarkStampResponse:
    """
    Collect the stamp for a booth.

    A repeat scan of the same booth answers 409 with the unchanged stamps.
    """
    return await service.mark_stamp(user_id, booth)
