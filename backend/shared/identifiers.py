"""
Registrant identifiers.

Identifiers are random UUID v4 strings. No uniqueness check is made beyond
trusting the random generator.
"""

import re
import uuid

UUID_V4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def new_identifier() -> str:
    """Generate a lowercase canonical UUID v4 string."""
    return str(uuid.uuid4())


def is_valid_identifier(value: object) -> bool:
    """Check whether a value is a UUID v4 string."""
    return isinstance(value, str) and UUID_V4_PATTERN.fullmatch(value) is not None
