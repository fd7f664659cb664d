"""
Classification of IDPay error responses.

The gateway reports failures as an HTTP status plus a JSON body of the form
``{"error_code": int, "message": str}``. :func:`classify` turns that pair into
a :class:`GatewayError` whose :class:`ErrorKind` callers can branch on. Some
kinds carry a value that only exists inside the free-text message (the
minimum/maximum amount, the caller's IP address); those are pulled out by
:func:`extract_first_integer` and :func:`extract_ipv4`. When such a value is
missing, :func:`classify` returns a :class:`ClassificationFailure` instead of
guessing.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Dict, Optional, Union

__all__ = [
    "ClassificationFailure",
    "ErrorBody",
    "ErrorKind",
    "GatewayError",
    "GatewayRequestError",
    "classify",
    "extract_first_integer",
    "extract_ipv4",
]

HTTP_FORBIDDEN = 403
HTTP_METHOD_NOT_ALLOWED = 405
HTTP_NOT_ACCEPTABLE = 406

_INTEGER_PATTERN = re.compile(r"\d+")
_IPV4_PATTERN = re.compile(r"\b(?:[0-9]{1,3}\.){3}[0-9]{1,3}\b")


class ErrorKind(enum.Enum):
    AMOUNT_LESS_THAN_MINIMUM = "amount_less_than_minimum"
    AMOUNT_EXCEEDS_MAXIMUM = "amount_exceeds_maximum"
    AMOUNT_EXCEEDS_LIMIT = "amount_exceeds_limit"
    CALLBACK_DOMAIN_MISMATCH = "callback_domain_mismatch"
    INVALID_CALLBACK_ADDRESS = "invalid_callback_address"
    USER_BLOCKED = "user_blocked"
    API_KEY_NOT_FOUND = "api_key_not_found"
    IP_MISMATCH = "ip_mismatch"
    WEB_SERVICE_NOT_APPROVED = "web_service_not_approved"
    BANK_ACCOUNT_NOT_APPROVED = "bank_account_not_approved"
    BANK_ACCOUNT_INACTIVE = "bank_account_inactive"
    TRANSACTION_NOT_CREATED = "transaction_not_created"
    UNEXPECTED_ERROR = "unexpected_error"


_NOT_ACCEPTABLE_KINDS: Dict[int, ErrorKind] = {
    34: ErrorKind.AMOUNT_LESS_THAN_MINIMUM,
    35: ErrorKind.AMOUNT_EXCEEDS_MAXIMUM,
    36: ErrorKind.AMOUNT_EXCEEDS_LIMIT,
    38: ErrorKind.CALLBACK_DOMAIN_MISMATCH,
    39: ErrorKind.INVALID_CALLBACK_ADDRESS,
}

_FORBIDDEN_KINDS: Dict[int, ErrorKind] = {
    11: ErrorKind.USER_BLOCKED,
    12: ErrorKind.API_KEY_NOT_FOUND,
    13: ErrorKind.IP_MISMATCH,
    14: ErrorKind.WEB_SERVICE_NOT_APPROVED,
    21: ErrorKind.BANK_ACCOUNT_NOT_APPROVED,
    24: ErrorKind.BANK_ACCOUNT_INACTIVE,
}

_KINDS_BY_STATUS: Dict[int, Dict[int, ErrorKind]] = {
    HTTP_NOT_ACCEPTABLE: _NOT_ACCEPTABLE_KINDS,
    HTTP_FORBIDDEN: _FORBIDDEN_KINDS,
}


@dataclass(frozen=True)
class ErrorBody:
    """Decoded body of a non-success response."""

    code: Optional[int]
    message: str = ""


@dataclass(frozen=True)
class GatewayError:
    kind: ErrorKind
    status_code: int
    code: Optional[int] = None
    message: str = ""
    minimum_amount: Optional[int] = None
    maximum_amount: Optional[int] = None
    ip_address: Optional[str] = None

    def describe(self) -> str:
        detail = f"{self.kind.value} (HTTP {self.status_code}, code {self.code})"
        if self.minimum_amount is not None:
            detail += f", minimum amount {self.minimum_amount}"
        if self.maximum_amount is not None:
            detail += f", maximum amount {self.maximum_amount}"
        if self.ip_address is not None:
            detail += f", ip {self.ip_address}"
        return detail


@dataclass(frozen=True)
class ClassificationFailure:
    """
    The response matched a known error, but its message lacked the value that
    error is supposed to carry.
    """

    intended_kind: ErrorKind
    status_code: int
    code: Optional[int]
    message: str
    reason: str

    def describe(self) -> str:
        return (
            f"unclassifiable {self.intended_kind.value} "
            f"(HTTP {self.status_code}, code {self.code}): {self.reason}"
        )


Classification = Union[GatewayError, ClassificationFailure]


class GatewayRequestError(Exception):
    """Raised when a caller unwraps an unsuccessful gateway outcome."""

    def __init__(self, error: Classification) -> None:
        self.error = error
        super().__init__(error.describe())

    @property
    def kind(self) -> ErrorKind:
        if isinstance(self.error, ClassificationFailure):
            return self.error.intended_kind
        return self.error.kind


def extract_first_integer(message: str) -> Optional[int]:
    """Return the first run of digits in ``message`` as an ``int``."""
    match = _INTEGER_PATTERN.search(message or "")
    if match is None:
        return None
    return int(match.group(0))


def extract_ipv4(message: str) -> Optional[str]:
    """Return the first dotted-quad in ``message``."""
    match = _IPV4_PATTERN.search(message or "")
    if match is None:
        return None
    return match.group(0)


def classify(status_code: int, body: ErrorBody) -> Classification:
    """
    Map an HTTP status and decoded error body onto an :class:`ErrorKind`.

    Unknown combinations become :attr:`ErrorKind.UNEXPECTED_ERROR`; the only
    way to get a :class:`ClassificationFailure` is a known code whose message
    does not contain the amount or IP address it should.
    """
    if status_code == HTTP_METHOD_NOT_ALLOWED:
        return GatewayError(
            kind=ErrorKind.TRANSACTION_NOT_CREATED,
            status_code=status_code,
            code=body.code,
            message=body.message,
        )

    table = _KINDS_BY_STATUS.get(status_code, {})
    kind = table.get(body.code, ErrorKind.UNEXPECTED_ERROR)

    def _failure(reason: str) -> ClassificationFailure:
        return ClassificationFailure(
            intended_kind=kind,
            status_code=status_code,
            code=body.code,
            message=body.message,
            reason=reason,
        )

    minimum: Optional[int] = None
    maximum: Optional[int] = None
    ip_address: Optional[str] = None
    if kind is ErrorKind.AMOUNT_LESS_THAN_MINIMUM:
        minimum = extract_first_integer(body.message)
        if minimum is None:
            return _failure("no minimum amount in message")
    elif kind is ErrorKind.AMOUNT_EXCEEDS_MAXIMUM:
        maximum = extract_first_integer(body.message)
        if maximum is None:
            return _failure("no maximum amount in message")
    elif kind is ErrorKind.IP_MISMATCH:
        ip_address = extract_ipv4(body.message)
        if ip_address is None:
            return _failure("no IPv4 address in message")

    return GatewayError(
        kind=kind,
        status_code=status_code,
        code=body.code,
        message=body.message,
        minimum_amount=minimum,
        maximum_amount=maximum,
        ip_address=ip_address,
    )
