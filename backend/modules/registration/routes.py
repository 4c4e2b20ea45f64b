"""
Registration API endpoints.

Provides the nickname sign-up, the FormSG webhook, and the FormSG
middleman/redirect helpers.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header, Query, Request
from fastapi.responses import RedirectResponse

from api.dependencies import get_registration_service
from shared.config import get_settings

from .interfaces import IRegistrationService
from .models import (
    CreateGuestRequest,
    RegistrationResponse,
    SubmissionReceipt,
    WebhookRegistrationResponse,
)

router = APIRouter()


@router.post("/create-guest", response_model=RegistrationResponse)
async def create_guest(
    request: Optional[CreateGuestRequest] = None,
    service: IRegistrationService = Depends(get_registration_service),
) -> RegistrationResponse:
    """
    Register a guest by nickname.

    Submitting a nickname that is already registered returns the existing
    registrant with isReturningUser set.
    """
    nickname = request.nickname if request else None
    return await service.register_nickname(nickname)


@router.post("/formsg-webhook", response_model=WebhookRegistrationResponse)
async def formsg_webhook(
    request: Request,
    x_formsg_signature: Optional[str] = Header(default=None),
    service: IRegistrationService = Depends(get_registration_service),
) -> WebhookRegistrationResponse:
    """
    Receive a FormSG submission and register its sender.

    The raw body is read before parsing so the signature can be checked
    against the exact bytes that were signed.
    """
    body = await request.body()
    return await service.register_from_webhook(body, x_formsg_signature)


@router.post("/receive-submission", response_model=SubmissionReceipt)
async def receive_submission(
    payload: Optional[dict[str, Any]] = Body(default=None),
    submission_id: Optional[str] = Query(default=None, alias="submissionId"),
    service: IRegistrationService = Depends(get_registration_service),
) -> SubmissionReceipt:
    """
    Record a submission id forwarded by the FormSG middleman.

    The id may arrive as submissionId or submission_id in the body, or as
    the submissionId query parameter.
    """
    payload = payload or {}
    return await service.receive_submission(
        payload.get("submissionId") or payload.get("submission_id") or submission_id,
        user_id=payload.get("userId") or payload.get("user_id"),
        email=payload.get("email"),
    )


@router.get("/formsg-redirect")
async def formsg_redirect(
    submission_id: Optional[str] = Query(default=None, alias="submissionId"),
    success: Optional[str] = Query(default=None),
) -> RedirectResponse:
    """
    Landing point for FormSG's post-submission redirect.

    Sends the browser to the stamp page on success, or home with an error.
    """
    domain = get_settings().domain.rstrip("/")
    if success and submission_id:
        return RedirectResponse(f"{domain}/stamps?submissionId={submission_id}&success=true")
    return RedirectResponse(f"{domain}/?error=form-submission-failed")
