"""
Registration module data models.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.models import CamelModel
from modules.stamps.models import StampSlot


NICKNAME_MIN_LENGTH = 2
NICKNAME_MAX_LENGTH = 20

PLACEHOLDER_EMAIL = "unknown@example.com"


class CreateGuestRequest(BaseModel):
    """
    Request to register (or look up) a guest by nickname.

    The nickname is deliberately untyped here: the service validates it,
    so wrong types get the same 400 as wrong lengths.
    """

    nickname: Any = None


class RegistrationResponse(CamelModel):
    """Response for POST /api/create-guest."""

    success: bool = True
    id: str
    is_returning_user: bool
    stamps: list[StampSlot]


class WebhookRegistrationResponse(CamelModel):
    """Response for POST /api/formsg-webhook."""

    success: bool = True
    user_id: str
    email: str
    redirect_url: str
    message: str = "User registered successfully"


class SubmissionReceipt(CamelModel):
    """Response for POST /api/receive-submission."""

    success: bool = True
    message: str = "Submission ID received successfully"
    submission_id: str
    timestamp: datetime


class NormalizedSubmission(BaseModel):
    """Registrant fields recovered from a FormSG payload."""

    email: Optional[str] = None
    name: Optional[str] = None
    form_id: Optional[str] = None
    submission_id: Optional[str] = None
    additional_data: dict[str, str] = Field(default_factory=dict)
    source: str = Field(
        default="none",
        description="Parser that produced the responses (decrypted, responses, data, top_level, none)",
    )
