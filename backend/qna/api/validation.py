"""Input Validation — field and path-parameter checks for the handler layer.

Invariants:
    - Every failure raises FieldValidationError (VALIDATION_FAILED, 400)
    - Messages name the offending field exactly as the client sent it
    - Numeric ids: optional sign plus ASCII digits, within signed 64-bit range, then >= 1
    - User ids: canonical, {braced}, urn:uuid: or 32 bare hex digits; nothing looser
"""

import re
import uuid

from qna.core.errors import FieldValidationError

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1

_UUID_CANONICAL = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
_UUID_PATTERN = re.compile(
    rf"{_UUID_CANONICAL}|\{{{_UUID_CANONICAL}\}}|urn:uuid:{_UUID_CANONICAL}|[0-9a-fA-F]{{32}}",
)


def require_non_empty(value: str, field: str) -> str:
    if len(value) == 0:
        raise FieldValidationError(f'field "{field}" must not be empty', field)
    return value


def parse_positive_id(raw: str, field: str = "id") -> int:
    """Parse a question/answer id from a path segment."""
    # Length check first: int() refuses very long digit strings outright.
    digits = raw.lstrip("+-").lstrip("0")
    if not _ID_PATTERN.fullmatch(raw) or len(digits) > 19:
        raise FieldValidationError(f'invalid ID format for "{field}"', field)
    value = int(raw)
    if not _MIN_ID <= value <= _MAX_ID:
        raise FieldValidationError(f'invalid ID format for "{field}"', field)
    if value < 1:
        raise FieldValidationError("ID must be a positive integer", field)
    return value


def parse_uuid(raw: str, field: str) -> str:
    """Validate a user id and return it in canonical hyphenated form."""
    if not _UUID_PATTERN.fullmatch(raw):
        raise FieldValidationError(f'invalid UUID format for "{field}"', field)
    return str(uuid.UUID(raw))
