"""
FormSG webhook signature checks and payload decryption.

Signatures are HMAC-SHA256 over the raw request body with a shared secret,
hex encoded, optionally prefixed with "sha256=".

Encrypted submissions use the FormSG storage-mode format:

    <submissionPublicKey>;<nonce>:<ciphertext>

each part base64 encoded. The ciphertext is a NaCl box opened with the
form secret key and the submission public key; the plaintext is the JSON
list of form responses.
"""

import base64
import hashlib
import hmac
import json
from typing import Any, Optional

from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey

from shared.exceptions import DecryptionError

from .exceptions import WebhookVerificationError

SIGNATURE_PREFIX = "sha256="


def compute_signature(body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 of body."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature: Optional[str], secret: str) -> None:
    """
    Check a webhook signature header against the shared secret.

    An empty secret means open mode and nothing is checked.

    Raises:
        WebhookVerificationError: If a secret is set and the signature is
            missing or does not match
    """
    if not secret:
        return
    if not signature:
        raise WebhookVerificationError()

    provided = signature.strip()
    if provided.lower().startswith(SIGNATURE_PREFIX):
        provided = provided[len(SIGNATURE_PREFIX):]

    expected = compute_signature(body, secret)
    if not hmac.compare_digest(expected, provided.lower()):
        raise WebhookVerificationError()


class FormSGDecryptor:
    """Decrypts FormSG encryptedContent with a form secret key."""

    def __init__(self, form_secret_key: str):
        self._form_secret_key = form_secret_key

    def decrypt(self, encrypted_content: str) -> list[dict[str, Any]]:
        """
        Decrypt encryptedContent to the list of form responses.

        Raises:
            DecryptionError: If the content is malformed, the box cannot be
                opened, or the plaintext is not a responses list
        """
        try:
            public_key_b64, rest = encrypted_content.split(";", 1)
            nonce_b64, ciphertext_b64 = rest.split(":", 1)

            box = Box(
                PrivateKey(base64.b64decode(self._form_secret_key)),
                PublicKey(base64.b64decode(public_key_b64)),
            )
            plaintext = box.decrypt(
                base64.b64decode(ciphertext_b64),
                base64.b64decode(nonce_b64),
            )
            decoded = json.loads(plaintext.decode("utf-8"))
        except (ValueError, CryptoError) as e:
            raise DecryptionError(str(e) or e.__class__.__name__) from e

        if isinstance(decoded, dict) and isinstance(decoded.get("responses"), list):
            decoded = decoded["responses"]
        if not isinstance(decoded, list):
            raise DecryptionError("decrypted content is not a list of responses")
        return decoded
