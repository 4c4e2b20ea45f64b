"""
Registration module exceptions.

These exceptions are raised by the registration module and rendered by
the API error handlers.
"""

from shared.exceptions import AuthenticationError, ValidationError


class InvalidNicknameError(ValidationError):
    """Raised when a nickname is missing, not a string, or the wrong length."""

    def __init__(self, min_length: int, max_length: int):
        super().__init__(
            f"Nickname must be {min_length}-{max_length} characters",
            code="INVALID_NICKNAME",
            details={"min_length": min_length, "max_length": max_length},
        )


class WebhookVerificationError(AuthenticationError):
    """Raised when the FormSG webhook signature does not match."""

    def __init__(self):
        super().__init__(
            "Webhook signature verification failed",
            code="WEBHOOK_VERIFICATION_FAILED",
        )


class MissingSubmissionIdError(ValidationError):
    """Raised when a submission receipt carries no submission id."""

    def __init__(self):
        super().__init__(
            "Please provide submissionId in request body or query parameter",
            code="MISSING_SUBMISSION_ID",
        )
