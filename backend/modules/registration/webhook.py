"""
FormSG webhook payload normalization.

FormSG (and the relays in front of it) deliver submissions in several
shapes:

    {"responses": [{"question": ..., "answer": ...}, ...]}
    {"data": [...]} or {"data": {...}}            # nested, possibly with encryptedContent
    {"encryptedContent": "..."}                   # storage-mode encrypted
    {"email": ..., "name": ...}                   # arbitrary flat object

Each shape has a pure parser returning a ParseAttempt. PARSER_CHAIN fixes
the order they are tried in; the first match wins. Field extraction then
picks email and name out of the normalized question/answer pairs.

Registration from the webhook is best effort: anything that cannot be
parsed degrades to placeholder values instead of failing the request.
That rule lives in apply_placeholder_policy.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from shared.exceptions import DecryptionError

from .models import NormalizedSubmission, PLACEHOLDER_EMAIL

logger = logging.getLogger(__name__)

# Top-level keys that describe the submission rather than answer a question
METADATA_KEYS = frozenset({
    "formId",
    "submissionId",
    "created",
    "version",
    "encryptedContent",
    "encryptedSubmissionSecretKey",
    "verifiedContent",
    "attachmentDownloadUrls",
    "responses",
    "data",
})


class PayloadDecryptor(Protocol):
    """Anything that can turn encryptedContent into a responses list."""

    def decrypt(self, encrypted_content: str) -> list[dict[str, Any]]:
        ...


@dataclass(frozen=True)
class FieldPair:
    """One normalized form answer."""

    question: str
    answer: str


@dataclass(frozen=True)
class ParseAttempt:
    """Result of one parser: matched with pairs, or no match."""

    source: str
    pairs: Optional[list[FieldPair]] = None

    @classmethod
    def matched(cls, source: str, pairs: list[FieldPair]) -> "ParseAttempt":
        return cls(source=source, pairs=pairs)

    @classmethod
    def no_match(cls, source: str) -> "ParseAttempt":
        return cls(source=source, pairs=None)

    @property
    def is_match(self) -> bool:
        return self.pairs is not None


@dataclass
class WebhookContext:
    """Inputs shared by every parser in the chain."""

    payload: dict[str, Any]
    decrypted: Optional[list[dict[str, Any]]] = None
    nested: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# Pair normalization
# -----------------------------------------------------------------------------


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(_stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


def normalize_pair(item: Any) -> Optional[FieldPair]:
    """
    Normalize one response item to a FieldPair.

    Accepts FormSG response objects ({question, answer} or
    {question, answerArray}). Items without a question are dropped.
    """
    if not isinstance(item, dict):
        return None
    question = item.get("question")
    if not isinstance(question, str) or not question.strip():
        return None
    answer = item.get("answer")
    if answer is None and "answerArray" in item:
        answer = item["answerArray"]
    return FieldPair(question=question.strip(), answer=_stringify(answer).strip())


def normalize_pairs(items: list[Any]) -> list[FieldPair]:
    """Normalize a list of response items, dropping unusable ones."""
    return [pair for pair in (normalize_pair(item) for item in items) if pair is not None]


def _pairs_from_mapping(mapping: dict[str, Any]) -> list[FieldPair]:
    return [
        FieldPair(question=key, answer=_stringify(value).strip())
        for key, value in mapping.items()
        if key not in METADATA_KEYS and not isinstance(value, (dict, list))
    ]


# -----------------------------------------------------------------------------
# Parsers, in priority order
# -----------------------------------------------------------------------------


def parse_decrypted(ctx: WebhookContext) -> ParseAttempt:
    """Responses recovered from encryptedContent."""
    if ctx.decrypted is None:
        return ParseAttempt.no_match("decrypted")
    return ParseAttempt.matched("decrypted", normalize_pairs(ctx.decrypted))


def parse_responses(ctx: WebhookContext) -> ParseAttempt:
    """A top-level responses array."""
    responses = ctx.payload.get("responses")
    if not isinstance(responses, list):
        return ParseAttempt.no_match("responses")
    return ParseAttempt.matched("responses", normalize_pairs(responses))


def parse_nested_data(ctx: WebhookContext) -> ParseAttempt:
    """A nested data field: a list of pairs, or an object of answers."""
    data = ctx.payload.get("data")
    if isinstance(data, list):
        return ParseAttempt.matched("data", normalize_pairs(data))
    if isinstance(data, dict):
        if isinstance(data.get("responses"), list):
            return ParseAttempt.matched("data", normalize_pairs(data["responses"]))
        pairs = _pairs_from_mapping(data)
        if pairs:
            return ParseAttempt.matched("data", pairs)
    return ParseAttempt.no_match("data")


def parse_top_level(ctx: WebhookContext) -> ParseAttempt:
    """Scalar top-level fields of a flat payload."""
    pairs = _pairs_from_mapping(ctx.payload)
    if not pairs:
        return ParseAttempt.no_match("top_level")
    return ParseAttempt.matched("top_level", pairs)


PARSER_CHAIN: list[Callable[[WebhookContext], ParseAttempt]] = [
    parse_decrypted,
    parse_responses,
    parse_nested_data,
    parse_top_level,
]


def run_parser_chain(ctx: WebhookContext) -> ParseAttempt:
    """Return the first matching parse attempt, or no_match("none")."""
    for parser in PARSER_CHAIN:
        attempt = parser(ctx)
        if attempt.is_match:
            return attempt
    return ParseAttempt.no_match("none")


# -----------------------------------------------------------------------------
# Field extraction
# -----------------------------------------------------------------------------


def extract_fields(pairs: list[FieldPair]) -> tuple[Optional[str], Optional[str], dict[str, str]]:
    """
    Pick email and name out of question/answer pairs.

    Questions are matched case-insensitively on the substrings "email"
    and "name"; the first non-empty match for each wins. Everything else
    is returned as additional data.
    """
    email: Optional[str] = None
    name: Optional[str] = None
    additional: dict[str, str] = {}

    for pair in pairs:
        question = pair.question.lower()
        if "email" in question:
            if email is None and pair.answer:
                email = pair.answer
            continue
        if "name" in question:
            if name is None and pair.answer:
                name = pair.answer
            continue
        additional[pair.question] = pair.answer

    return email, name, additional


def _first_email_like(values: Any) -> Optional[str]:
    if isinstance(values, dict):
        values = values.values()
    for value in values:
        if isinstance(value, str) and "@" in value:
            return value.strip()
    return None


def find_fallback_email(payload: dict[str, Any]) -> Optional[str]:
    """
    Look for an email-like value when no question mentioned email.

    Scans top-level string values first, then the nested data field
    (its values if it is an object, its answers if it is a list).
    """
    email = _first_email_like(payload)
    if email:
        return email

    data = payload.get("data")
    if isinstance(data, dict):
        return _first_email_like(data)
    if isinstance(data, list):
        return _first_email_like(pair.answer for pair in normalize_pairs(data))
    return None


# -----------------------------------------------------------------------------
# Decryption and metadata
# -----------------------------------------------------------------------------


def _nested(payload: dict[str, Any]) -> dict[str, Any]:
    data = payload.get("data")
    return data if isinstance(data, dict) else {}


def _lookup(ctx: WebhookContext, key: str) -> Any:
    value = ctx.payload.get(key)
    if value is None:
        value = ctx.nested.get(key)
    return value


def _lookup_text(ctx: WebhookContext, key: str) -> Optional[str]:
    value = _lookup(ctx, key)
    return str(value) if value is not None else None


def submission_metadata(payload: dict[str, Any]) -> dict[str, Optional[str]]:
    """formId and submissionId, from the top level or the nested data object."""
    ctx = WebhookContext(payload=payload, nested=_nested(payload))
    return {
        "form_id": _lookup_text(ctx, "formId"),
        "submission_id": _lookup_text(ctx, "submissionId"),
    }


def decrypt_responses(
    ctx: WebhookContext,
    decryptor: Optional[PayloadDecryptor],
) -> Optional[list[dict[str, Any]]]:
    """
    Recover responses from encryptedContent, if present.

    Without a decryptor, or when decryption fails, the content is tried
    as plain JSON instead. Returns None when neither works.
    """
    content = _lookup(ctx, "encryptedContent")
    if not isinstance(content, str) or not content:
        return None

    if decryptor is not None:
        try:
            return decryptor.decrypt(content)
        except DecryptionError as e:
            logger.warning("FormSG decryption failed, trying plain JSON: %s", e.message)

    try:
        decoded = json.loads(content)
    except ValueError:
        logger.warning("encryptedContent is neither decryptable nor JSON")
        return None

    if isinstance(decoded, dict) and isinstance(decoded.get("responses"), list):
        decoded = decoded["responses"]
    return decoded if isinstance(decoded, list) else None


# -----------------------------------------------------------------------------
# Policy and entry point
# -----------------------------------------------------------------------------


def apply_placeholder_policy(submission: NormalizedSubmission) -> NormalizedSubmission:
    """
    Fill in placeholders for anything the payload did not provide.

    The webhook never rejects a registrant because their submission could
    not be parsed; they are registered with a sentinel email instead.
    """
    if submission.email:
        return submission
    return submission.model_copy(update={"email": PLACEHOLDER_EMAIL})


def normalize_submission(
    payload: Any,
    decryptor: Optional[PayloadDecryptor] = None,
) -> NormalizedSubmission:
    """
    Normalize any webhook payload into registrant fields.

    Never raises on malformed payloads: parse errors degrade to the
    placeholder policy, keeping whatever submission metadata the payload
    carries.
    """
    if not isinstance(payload, dict):
        logger.warning("Webhook payload is not an object: %s", type(payload).__name__)
        return apply_placeholder_policy(NormalizedSubmission())

    try:
        ctx = WebhookContext(payload=payload, nested=_nested(payload))
        ctx.decrypted = decrypt_responses(ctx, decryptor)

        attempt = run_parser_chain(ctx)
        email, name, additional = extract_fields(attempt.pairs or [])
        if not email:
            email = find_fallback_email(payload)

        submission = NormalizedSubmission(
            email=email,
            name=name,
            **submission_metadata(payload),
            additional_data=additional,
            source=attempt.source,
        )
    except Exception:
        logger.exception("Failed to normalize webhook payload, using placeholders")
        submission = NormalizedSubmission(**submission_metadata(payload))

    return apply_placeholder_policy(submission)
