"""
Value objects exchanged with the IDPay gateway.

Request objects validate and normalize themselves on construction so an
instance that exists is always safe to encode. Response records are plain
frozen containers filled in by :mod:`idpay_client.core.responses`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Optional, Tuple

from .validation import (
    CALLBACK_MAX_LENGTH,
    CARD_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    IDENTIFIER_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    ValidationError,
    validate_amount,
    validate_text,
)

__all__ = [
    "DateRange",
    "PayerInfo",
    "PaymentCreationResult",
    "PaymentInfo",
    "PaymentRequest",
    "SettlementInfo",
    "TransactionListQuery",
    "TransactionPage",
    "TransactionQuery",
    "TransactionRecord",
    "TransactionStatus",
    "VerifyInfo",
    "WageInfo",
]


class TransactionStatus(IntEnum):
    """Transaction states reported by the gateway."""

    NOT_PAID = 1
    FAILED = 2
    ERROR = 3
    BLOCKED = 4
    RETURNED_TO_PAYER = 5
    SYSTEM_REVERSED = 6
    CANCELLED = 7
    REDIRECTED_TO_GATEWAY = 8
    AWAITING_VERIFICATION = 10
    VERIFIED = 100
    ALREADY_VERIFIED = 101
    SETTLED = 200


def _set(instance: object, name: str, value: object) -> None:
    object.__setattr__(instance, name, value)


@dataclass(frozen=True)
class PaymentRequest:
    order_id: str
    amount: int
    callback: str
    description: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    def __post_init__(self) -> None:
        _set(
            self,
            "order_id",
            validate_text(
                "order_id",
                self.order_id,
                max_length=IDENTIFIER_MAX_LENGTH,
                required=True,
            ),
        )
        _set(self, "amount", validate_amount("amount", self.amount))
        _set(
            self,
            "callback",
            validate_text(
                "callback",
                self.callback,
                max_length=CALLBACK_MAX_LENGTH,
                required=True,
            ),
        )
        _set(
            self,
            "description",
            validate_text(
                "description", self.description, max_length=DESCRIPTION_MAX_LENGTH
            ),
        )
        _set(self, "name", validate_text("name", self.name, max_length=NAME_MAX_LENGTH))
        _set(
            self, "phone", validate_text("phone", self.phone, max_length=PHONE_MAX_LENGTH)
        )
        _set(
            self, "email", validate_text("email", self.email, max_length=EMAIL_MAX_LENGTH)
        )


@dataclass(frozen=True)
class TransactionQuery:
    """Identifies one transaction for the verify and inquiry endpoints."""

    transaction_id: str
    order_id: str

    def __post_init__(self) -> None:
        _set(
            self,
            "transaction_id",
            validate_text(
                "transaction_id",
                self.transaction_id,
                max_length=IDENTIFIER_MAX_LENGTH,
                required=True,
            ),
        )
        _set(
            self,
            "order_id",
            validate_text(
                "order_id",
                self.order_id,
                max_length=IDENTIFIER_MAX_LENGTH,
                required=True,
            ),
        )


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of epoch seconds."""

    min: int
    max: int

    def __post_init__(self) -> None:
        for name in ("min", "max"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(
                    f"date_range.{name}", "must be a non-negative epoch second", value
                )
        if self.min > self.max:
            raise ValidationError("date_range", "min must not exceed max", (self.min, self.max))


@dataclass(frozen=True)
class TransactionListQuery:
    page: int = 0
    page_size: int = 25
    transaction_id: Optional[str] = None
    order_id: Optional[str] = None
    amount: Optional[int] = None
    statuses: Tuple[int, ...] = ()
    track_id: Optional[str] = None
    card_no: Optional[str] = None
    hashed_card_no: Optional[str] = None
    payment_date: Optional[DateRange] = None
    settlement_date: Optional[DateRange] = None

    def __post_init__(self) -> None:
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 0:
            raise ValidationError("page", "must be a non-negative integer", self.page)
        if (
            isinstance(self.page_size, bool)
            or not isinstance(self.page_size, int)
            or self.page_size <= 0
        ):
            raise ValidationError("page_size", "must be a positive integer", self.page_size)

        _set(
            self,
            "transaction_id",
            validate_text(
                "transaction_id", self.transaction_id, max_length=IDENTIFIER_MAX_LENGTH
            ),
        )
        _set(
            self,
            "order_id",
            validate_text("order_id", self.order_id, max_length=IDENTIFIER_MAX_LENGTH),
        )
        _set(self, "amount", validate_amount("amount", self.amount, required=False))
        _set(
            self,
            "track_id",
            validate_text("track_id", self.track_id, max_length=IDENTIFIER_MAX_LENGTH),
        )
        _set(
            self,
            "card_no",
            validate_text("card_no", self.card_no, max_length=CARD_MAX_LENGTH) or None,
        )
        _set(
            self,
            "hashed_card_no",
            validate_text("hashed_card_no", self.hashed_card_no, max_length=CARD_MAX_LENGTH)
            or None,
        )

        if isinstance(self.statuses, (str, bytes)):
            raise ValidationError("statuses", "must be a sequence of status codes", self.statuses)
        try:
            statuses = tuple(self.statuses)
        except TypeError as exc:
            raise ValidationError(
                "statuses", "must be a sequence of status codes", self.statuses
            ) from exc
        for status in statuses:
            if isinstance(status, bool) or not isinstance(status, int):
                raise ValidationError("statuses", "must contain integer status codes", status)
        _set(self, "statuses", tuple(int(status) for status in statuses))


@dataclass(frozen=True)
class PaymentCreationResult:
    success: bool
    transaction_id: str = ""
    payment_link: str = ""
    error_code: Optional[int] = None
    message: str = ""


@dataclass(frozen=True)
class PaymentInfo:
    track_id: str
    amount: int
    card_no: str
    hashed_card_no: str
    date: Optional[datetime]


@dataclass(frozen=True)
class PayerInfo:
    name: str = ""
    phone: str = ""
    email: str = ""
    description: str = ""


@dataclass(frozen=True)
class WageInfo:
    by: str
    type: str
    amount: int


@dataclass(frozen=True)
class VerifyInfo:
    date: Optional[datetime]


@dataclass(frozen=True)
class SettlementInfo:
    track_id: str
    amount: int
    date: Optional[datetime]


@dataclass(frozen=True)
class TransactionRecord:
    status: int
    track_id: str
    id: str
    order_id: str
    amount: int
    date: Optional[datetime] = None
    payment: Optional[PaymentInfo] = None
    payer: Optional[PayerInfo] = None
    wage: Optional[WageInfo] = None
    verify: Optional[VerifyInfo] = None
    settlement: Optional[SettlementInfo] = None

    @property
    def transaction_status(self) -> Optional[TransactionStatus]:
        """The status as a :class:`TransactionStatus`, or ``None`` if undocumented."""
        try:
            return TransactionStatus(self.status)
        except ValueError:
            return None


@dataclass(frozen=True)
class TransactionPage:
    records: Tuple[TransactionRecord, ...] = field(default_factory=tuple)
    page: Optional[int] = None
    page_size: Optional[int] = None
    total_count: Optional[int] = None
