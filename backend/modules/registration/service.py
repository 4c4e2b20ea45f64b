"""
Registration service implementation with Firestore.

Creates registrants (a user document plus a fresh stamp card, written in
one batch) from either the nickname form or the FormSG webhook.
"""

import json
import logging
from typing import Any, Optional

from shared.identifiers import new_identifier
from shared.timestamps import utc_now
from modules.stamps.exceptions import StampCardNotFoundError
from modules.stamps.models import StampSlot, new_stamp_slots
from modules.stamps.repository import RegistrantRepository

from .crypto import verify_signature
from .exceptions import InvalidNicknameError, MissingSubmissionIdError
from .interfaces import IRegistrationService
from .models import (
    NICKNAME_MAX_LENGTH,
    NICKNAME_MIN_LENGTH,
    NormalizedSubmission,
    RegistrationResponse,
    SubmissionReceipt,
    WebhookRegistrationResponse,
)
from .webhook import PayloadDecryptor, normalize_submission

logger = logging.getLogger(__name__)


def validate_nickname(nickname: Any) -> str:
    """
    Trim and validate a nickname.

    Raises:
        InvalidNicknameError: If not a string of 2-20 characters after trimming
    """
    if not isinstance(nickname, str):
        raise InvalidNicknameError(NICKNAME_MIN_LENGTH, NICKNAME_MAX_LENGTH)
    name = nickname.strip()
    if not NICKNAME_MIN_LENGTH <= len(name) <= NICKNAME_MAX_LENGTH:
        raise InvalidNicknameError(NICKNAME_MIN_LENGTH, NICKNAME_MAX_LENGTH)
    return name


def parse_webhook_body(body: bytes) -> Any:
    """Decode a webhook body as JSON; None if it is not JSON."""
    try:
        return json.loads(body) if body else None
    except ValueError:
        logger.warning("Webhook body is not valid JSON (%d bytes)", len(body))
        return None


class RegistrationService(IRegistrationService):
    """
    Registration service with Firestore backend.

    Implements IRegistrationService protocol with real database operations.
    """

    def __init__(
        self,
        repository: RegistrantRepository,
        domain: str,
        webhook_secret: str = "",
        decryptor: Optional[PayloadDecryptor] = None,
    ):
        self._repository = repository
        self._domain = domain.rstrip("/")
        self._webhook_secret = webhook_secret
        self._decryptor = decryptor

    async def register_nickname(self, nickname: Any) -> RegistrationResponse:
        """Create or look up a registrant by nickname."""
        name = validate_nickname(nickname)

        existing = self._repository.find_user_by_field("nickname", name)
        if existing is not None:
            user_id, _ = existing
            card = self._repository.get_stamp_card(user_id)
            if card is None:
                logger.warning("User %s has no stamp card", user_id)
                raise StampCardNotFoundError(user_id)

            self._repository.touch_user(user_id, utc_now())
            logger.info("Returning user %s", user_id)
            return RegistrationResponse(
                id=user_id,
                is_returning_user=True,
                stamps=card.stamps,
            )

        now = utc_now()
        user_id, stamps = self._create_registrant({
            "nickname": name,
            "createdAt": now,
            "lastActive": now,
        })
        logger.info("Registered user %s", user_id)

        return RegistrationResponse(
            id=user_id,
            is_returning_user=False,
            stamps=stamps,
        )

    async def register_from_webhook(
        self,
        body: bytes,
        signature: Optional[str],
    ) -> WebhookRegistrationResponse:
        """Register a new registrant from a FormSG delivery."""
        verify_signature(body, signature, self._webhook_secret)

        payload = parse_webhook_body(body)
        submission = normalize_submission(payload, self._decryptor)
        logger.info(
            "FormSG webhook received (form=%s, submission=%s, parsed from %s)",
            submission.form_id,
            submission.submission_id,
            submission.source,
        )

        raw = json.dumps(payload) if payload is not None else body.decode("utf-8", errors="replace")
        user_id, _ = self._create_registrant(self._webhook_user_data(submission, raw))
        logger.info("Registered user %s with email %s", user_id, submission.email)

        return WebhookRegistrationResponse(
            user_id=user_id,
            email=submission.email,
            redirect_url=self.stamp_page_url(user_id),
        )

    async def receive_submission(
        self,
        submission_id: Optional[str],
        user_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> SubmissionReceipt:
        """Store a submission audit record."""
        if not submission_id:
            raise MissingSubmissionIdError()

        now = utc_now()
        self._repository.save_submission(submission_id, {
            "submissionId": submission_id,
            "userId": user_id,
            "email": email,
            "receivedAt": now,
            "source": "middleman-api",
        })
        logger.info("Submission saved: %s", submission_id)

        return SubmissionReceipt(submission_id=submission_id, timestamp=now)

    def stamp_page_url(self, user_id: str) -> str:
        """URL of a registrant's stamp page."""
        return f"{self._domain}/stamps?id={user_id}"

    def _create_registrant(self, user_data: dict[str, Any]) -> tuple[str, list[StampSlot]]:
        """Write a new user and their fresh stamp card."""
        user_id = new_identifier()
        stamps = new_stamp_slots()
        self._repository.create_registrant(user_id, user_data, stamps, utc_now())
        return user_id, stamps

    def _webhook_user_data(
        self,
        submission: NormalizedSubmission,
        raw_payload: str,
    ) -> dict[str, Any]:
        """
        User document for a webhook registrant.

        The raw payload is kept as a JSON string and unmatched answers as a
        list of question/answer maps; question text is never used as a
        Firestore field name.
        """
        now = utc_now()
        return {
            "email": submission.email,
            "name": submission.name,
            "formId": submission.form_id,
            "submissionId": submission.submission_id,
            "additionalData": [
                {"question": question, "answer": answer}
                for question, answer in submission.additional_data.items()
            ],
            "formData": raw_payload,
            "source": "formsg",
            "createdAt": now,
            "lastActive": now,
        }
