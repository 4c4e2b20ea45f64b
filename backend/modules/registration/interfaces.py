"""
Registration module interface.

The API layer depends on IRegistrationService for both ways a registrant
can sign up: the nickname form and the FormSG webhook.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    RegistrationResponse,
    SubmissionReceipt,
    WebhookRegistrationResponse,
)


@runtime_checkable
class IRegistrationService(Protocol):
    """
    Interface for registration operations.
    """

    async def register_nickname(self, nickname: Any) -> RegistrationResponse:
        """
        Create a registrant for a nickname, or return the existing one.

        Args:
            nickname: Raw nickname from the request body

        Returns:
            The registrant id, their stamps, and whether they already existed

        Raises:
            InvalidNicknameError: If the nickname is not a 2-20 character string
            StampCardNotFoundError: If a returning user has no stamp card
        """
        ...

    async def register_from_webhook(
        self,
        body: bytes,
        signature: Optional[str],
    ) -> WebhookRegistrationResponse:
        """
        Register a new registrant from a FormSG webhook delivery.

        Always creates a new registrant; unparseable payloads are registered
        with placeholder values rather than rejected.

        Args:
            body: Raw request body (the signature covers these bytes)
            signature: Value of the X-FormSG-Signature header, if any

        Returns:
            The new registrant id, email, and the stamp page URL

        Raises:
            WebhookVerificationError: If a secret is configured and the
                signature does not match
        """
        ...

    async def receive_submission(
        self,
        submission_id: Optional[str],
        user_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> SubmissionReceipt:
        """
        Record a submission id relayed by the FormSG middleman.

        Raises:
            MissingSubmissionIdError: If submission_id is empty
        """
        ...
