"""
Field-level rules applied to everything sent to the IDPay gateway.
"""

from __future__ import annotations

import re
from typing import Any, Optional

__all__ = [
    "AMOUNT_MAX",
    "AMOUNT_MIN",
    "CALLBACK_MAX_LENGTH",
    "CARD_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "EMAIL_MAX_LENGTH",
    "IDENTIFIER_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "PHONE_MAX_LENGTH",
    "ValidationError",
    "normalize_email",
    "normalize_phone",
    "validate_amount",
    "validate_text",
]

IDENTIFIER_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 255
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 11
CALLBACK_MAX_LENGTH = 2048
# masked PAN or its SHA-256 hex digest
CARD_MAX_LENGTH = 64

# Rials
AMOUNT_MIN = 1_000
AMOUNT_MAX = 500_000_000

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_PHONE_PATTERN = re.compile(r"^(0|\+98)?([ -]?)9[1-4][0-9]{8}$")


class ValidationError(ValueError):
    """Raised when a field value cannot be sent to the gateway."""

    def __init__(self, field: str, constraint: str, value: Any) -> None:
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"{field} {constraint} (got {value!r})")


def validate_text(
    field: str,
    value: Optional[str],
    *,
    max_length: int,
    required: bool = False,
) -> Optional[str]:
    """
    Trim ``value`` and check it against ``max_length``.

    Optional fields that are ``None`` stay ``None``. The bound is checked after
    trimming so a value that already passed validation always passes again.
    """
    if value is None:
        if required:
            raise ValidationError(field, "is required", value)
        return None
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string", value)

    trimmed = value.strip()
    if required and not trimmed:
        raise ValidationError(field, "must not be empty", value)
    if len(trimmed) > max_length:
        raise ValidationError(
            field, f"must be at most {max_length} characters", value
        )
    return trimmed


def validate_amount(
    field: str,
    value: Optional[int],
    *,
    required: bool = True,
) -> Optional[int]:
    if value is None:
        if required:
            raise ValidationError(field, "is required", value)
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "must be an integer number of Rials", value)
    if value < AMOUNT_MIN or value > AMOUNT_MAX:
        raise ValidationError(
            field,
            f"must be between {AMOUNT_MIN:,} and {AMOUNT_MAX:,} Rials",
            value,
        )
    return value


def normalize_email(value: Optional[str]) -> str:
    """Return the address if it looks like ``local@domain.tld``, else ``""``."""
    if not value:
        return ""
    candidate = value.strip()
    return candidate if _EMAIL_PATTERN.match(candidate) else ""


def normalize_phone(value: Optional[str]) -> str:
    """Return the number if it is an Iranian mobile number, else ``""``."""
    if not value:
        return ""
    candidate = value.strip()
    return candidate if _PHONE_PATTERN.match(candidate) else ""
