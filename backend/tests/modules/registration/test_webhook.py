"""Tests for FormSG payload normalization."""

import json

import pytest

from modules.registration.models import NormalizedSubmission, PLACEHOLDER_EMAIL
from modules.registration.webhook import (
    FieldPair,
    ParseAttempt,
    WebhookContext,
    apply_placeholder_policy,
    extract_fields,
    find_fallback_email,
    normalize_pair,
    normalize_submission,
    run_parser_chain,
)
from shared.exceptions import DecryptionError


class StaticDecryptor:
    """Decryptor returning fixed responses, or failing."""

    def __init__(self, responses=None):
        self.responses = responses
        self.calls: list[str] = []

    def decrypt(self, encrypted_content: str):
        self.calls.append(encrypted_content)
        if self.responses is None:
            raise DecryptionError("bad box")
        return self.responses


class TestNormalizePair:
    def test_question_and_answer(self):
        assert normalize_pair({"question": " Email ", "answer": " a@b.com "}) == FieldPair("Email", "a@b.com")

    def test_answer_array(self):
        pair = normalize_pair({"question": "Interests", "answerArray": ["AI", "Cloud"]})
        assert pair == FieldPair("Interests", "AI, Cloud")

    @pytest.mark.parametrize("item", [None, "text", {}, {"answer": "x"}, {"question": "  "}])
    def test_drops_unusable_items(self, item):
        assert normalize_pair(item) is None


class TestExtractFields:
    def test_matches_case_insensitively(self):
        email, name, additional = extract_fields([
            FieldPair("Your EMAIL address", "a@b.com"),
            FieldPair("Full Name", "Ada Lovelace"),
            FieldPair("Company", "Analytical Engines"),
        ])

        assert email == "a@b.com"
        assert name == "Ada Lovelace"
        assert additional == {"Company": "Analytical Engines"}

    def test_first_non_empty_wins(self):
        email, name, _ = extract_fields([
            FieldPair("Email", ""),
            FieldPair("Work email", "work@b.com"),
            FieldPair("Personal email", "home@b.com"),
            FieldPair("Name", "Ada"),
            FieldPair("Nickname", "Countess"),
        ])

        assert email == "work@b.com"
        assert name == "Ada"

    def test_nothing_matches(self):
        assert extract_fields([FieldPair("Company", "X")]) == (None, None, {"Company": "X"})


class TestParserChain:
    def test_decrypted_takes_priority(self):
        ctx = WebhookContext(
            payload={"responses": [{"question": "Email", "answer": "plain@b.com"}]},
            decrypted=[{"question": "Email", "answer": "secret@b.com"}],
        )

        attempt = run_parser_chain(ctx)

        assert attempt.source == "decrypted"
        assert attempt.pairs == [FieldPair("Email", "secret@b.com")]

    def test_nothing_parsable(self):
        attempt = run_parser_chain(WebhookContext(payload={"formId": "f1", "data": "x"}))

        assert attempt == ParseAttempt.no_match("none")
        assert attempt.is_match is False


class TestFallbackEmail:
    def test_top_level_value(self):
        assert find_fallback_email({"contact": "a@b.com"}) == "a@b.com"

    def test_nested_object(self):
        assert find_fallback_email({"data": {"contact": " a@b.com "}}) == "a@b.com"

    def test_nested_list(self):
        payload = {"data": [{"question": "Contact", "answer": "a@b.com"}]}
        assert find_fallback_email(payload) == "a@b.com"

    def test_none(self):
        assert find_fallback_email({"data": {"contact": "nobody"}}) is None


class TestPlaceholderPolicy:
    def test_fills_missing_email(self):
        assert apply_placeholder_policy(NormalizedSubmission()).email == PLACEHOLDER_EMAIL

    def test_keeps_present_email(self):
        submission = NormalizedSubmission(email="a@b.com")
        assert apply_placeholder_policy(submission).email == "a@b.com"


class TestNormalizeSubmission:
    def test_responses_array(self):
        submission = normalize_submission({
            "formId": "form-1",
            "submissionId": "sub-1",
            "responses": [
                {"question": "Email", "answer": "a@b.com"},
                {"question": "Name", "answer": "Ada"},
                {"question": "Company", "answer": "Engines"},
            ],
        })

        assert submission.email == "a@b.com"
        assert submission.name == "Ada"
        assert submission.form_id == "form-1"
        assert submission.submission_id == "sub-1"
        assert submission.additional_data == {"Company": "Engines"}
        assert submission.source == "responses"

    def test_no_email_gets_placeholder(self):
        submission = normalize_submission({"responses": [{"question": "Name", "answer": "Ada"}]})

        assert submission.email == PLACEHOLDER_EMAIL
        assert submission.name == "Ada"

    def test_nested_data_list(self):
        submission = normalize_submission({
            "data": [{"question": "E-mail / Email", "answer": "a@b.com"}],
        })

        assert submission.email == "a@b.com"
        assert submission.source == "data"

    def test_nested_data_object_with_metadata(self):
        submission = normalize_submission({
            "data": {"formId": "form-2", "submissionId": "sub-2", "email": "a@b.com", "name": "Ada"},
        })

        assert submission.email == "a@b.com"
        assert submission.name == "Ada"
        assert submission.form_id == "form-2"
        assert submission.submission_id == "sub-2"
        assert submission.additional_data == {}

    def test_flat_payload(self):
        submission = normalize_submission({"email": "a@b.com", "name": "Ada", "formId": "f"})

        assert submission.email == "a@b.com"
        assert submission.name == "Ada"
        assert submission.source == "top_level"

    def test_encrypted_content_is_decrypted(self):
        decryptor = StaticDecryptor([{"question": "Email", "answer": "secret@b.com"}])

        submission = normalize_submission({"encryptedContent": "pub;nonce:cipher"}, decryptor)

        assert decryptor.calls == ["pub;nonce:cipher"]
        assert submission.email == "secret@b.com"
        assert submission.source == "decrypted"

    def test_encrypted_content_inside_data(self):
        decryptor = StaticDecryptor([{"question": "Name", "answer": "Ada"}])

        submission = normalize_submission(
            {"data": {"formId": "f", "encryptedContent": "pub;nonce:cipher"}},
            decryptor,
        )

        assert submission.name == "Ada"
        assert submission.form_id == "f"

    def test_failed_decryption_falls_back_to_plain_json(self):
        content = json.dumps([{"question": "Email", "answer": "plain@b.com"}])

        submission = normalize_submission({"encryptedContent": content}, StaticDecryptor())

        assert submission.email == "plain@b.com"
        assert submission.source == "decrypted"

    def test_undecryptable_content_degrades_to_placeholder(self):
        submission = normalize_submission({"encryptedContent": "pub;nonce:cipher"}, StaticDecryptor())

        assert submission.email == PLACEHOLDER_EMAIL

    @pytest.mark.parametrize("payload", [None, [], "text", 42])
    def test_non_object_payload(self, payload):
        submission = normalize_submission(payload)

        assert submission.email == PLACEHOLDER_EMAIL
        assert submission.source == "none"

    def test_unexpected_failure_degrades_to_placeholder(self):
        class BrokenDecryptor:
            def decrypt(self, encrypted_content):
                raise RuntimeError("boom")

        submission = normalize_submission({"encryptedContent": "x", "email": "a@b.com"}, BrokenDecryptor())

        assert submission.email == PLACEHOLDER_EMAIL
        assert submission.source == "none"

    def test_unexpected_failure_keeps_submission_metadata(self):
        class BrokenDecryptor:
            def decrypt(self, encrypted_content):
                raise RuntimeError("boom")

        submission = normalize_submission(
            {"encryptedContent": "x", "formId": "form-9", "data": {"submissionId": 42}},
            BrokenDecryptor(),
        )

        assert submission.email == PLACEHOLDER_EMAIL
        assert submission.form_id == "form-9"
        assert submission.submission_id == "42"
