"""
Registration module.

Creates registrants from the nickname form and from FormSG webhooks.

Public API:
- IRegistrationService: Interface for registration operations
- normalize_submission: FormSG payload normalizer
- FormSGDecryptor, verify_signature: Webhook crypto
- Registration exceptions: InvalidNicknameError, etc.
"""

from .interfaces import IRegistrationService
from .models import (
    CreateGuestRequest,
    RegistrationResponse,
    WebhookRegistrationResponse,
    SubmissionReceipt,
    NormalizedSubmission,
    PLACEHOLDER_EMAIL,
)
from .webhook import normalize_submission, apply_placeholder_policy
from .crypto import FormSGDecryptor, verify_signature
from .exceptions import (
    InvalidNicknameError,
    WebhookVerificationError,
    MissingSubmissionIdError,
)

__all__ = [
    # Interface
    "IRegistrationService",
    # Models
    "CreateGuestRequest",
    "RegistrationResponse",
    "WebhookRegistrationResponse",
    "SubmissionReceipt",
    "NormalizedSubmission",
    "PLACEHOLDER_EMAIL",
    # Webhook
    "normalize_submission",
    "apply_placeholder_policy",
    "FormSGDecryptor",
    "verify_signature",
    # Exceptions
    "InvalidNicknameError",
    "WebhookVerificationError",
    "MissingSubmissionIdError",
]
