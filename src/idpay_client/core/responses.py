"""
Decoding of gateway responses into the records in :mod:`idpay_client.core.models`.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from .errors import ErrorBody
from .models import (
    PayerInfo,
    PaymentCreationResult,
    PaymentInfo,
    SettlementInfo,
    TransactionPage,
    TransactionRecord,
    VerifyInfo,
    WageInfo,
)
from .transport import TransportResponse

__all__ = [
    "HTTP_CREATED",
    "ResponseDecodeError",
    "decode_error_body",
    "decode_payment_creation",
    "decode_transaction",
    "decode_transaction_page",
    "is_created",
    "is_success",
]

HTTP_CREATED = 201


class ResponseDecodeError(RuntimeError):
    """Raised when a success response does not have the expected shape."""


def is_created(status_code: int) -> bool:
    return status_code == HTTP_CREATED


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _load_json(response: TransportResponse) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ResponseDecodeError(
            f"Failed to parse JSON from gateway (HTTP {response.status_code}): "
            f"{response.text}"
        ) from exc


def _load_object(response: TransportResponse) -> Dict[str, Any]:
    payload = _load_json(response)
    if not isinstance(payload, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object from gateway, got {type(payload).__name__}"
        )
    return payload


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _int(value: Any, key: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ResponseDecodeError(f"{key} is not an integer: {value!r}") from exc


def _amount(payload: Mapping[str, Any], key: str = "amount") -> int:
    """
    Read an amount in Rials.

    The gateway may send amounts as strings or numbers; either way they must be
    whole Rials. Fractional values are rejected instead of rounded.
    """
    raw = payload.get(key)
    if raw is None or raw == "":
        return 0
    try:
        amount = Decimal(str(raw).strip())
        integral = amount.to_integral_exact()
    except InvalidOperation as exc:
        raise ResponseDecodeError(f"{key} is not a number: {raw!r}") from exc
    if not amount.is_finite():
        raise ResponseDecodeError(f"{key} is not a finite number: {raw!r}")
    if integral != amount:
        raise ResponseDecodeError(f"{key} is not a whole number of Rials: {raw!r}")
    return int(integral)


def _date(payload: Mapping[str, Any], key: str = "date") -> Optional[datetime]:
    seconds = _int(payload.get(key), key)
    if not seconds:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ResponseDecodeError(f"{key} is not a valid epoch second: {seconds!r}") from exc


def _section(payload: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ResponseDecodeError(f"{key} must be an object, got {value!r}")
    return value


def _payment_info(section: Mapping[str, Any]) -> PaymentInfo:
    return PaymentInfo(
        track_id=_text(section, "track_id"),
        amount=_amount(section),
        card_no=_text(section, "card_no"),
        hashed_card_no=_text(section, "hashed_card_no"),
        date=_date(section),
    )


def _payer_info(section: Mapping[str, Any]) -> PayerInfo:
    return PayerInfo(
        name=_text(section, "name"),
        phone=_text(section, "phone"),
        email=_text(section, "mail"),
        description=_text(section, "desc"),
    )


def _wage_info(section: Mapping[str, Any]) -> WageInfo:
    return WageInfo(
        by=_text(section, "by"),
        type=_text(section, "type"),
        amount=_amount(section),
    )


def _settlement_info(section: Mapping[str, Any]) -> SettlementInfo:
    return SettlementInfo(
        track_id=_text(section, "track_id"),
        amount=_amount(section),
        date=_date(section),
    )


def _record(payload: Mapping[str, Any]) -> TransactionRecord:
    status = _int(payload.get("status"), "status")
    if status is None:
        raise ResponseDecodeError(f"Transaction without status: {payload!r}")

    payment = _section(payload, "payment")
    payer = _section(payload, "payer")
    wage = _section(payload, "wage")
    verify = _section(payload, "verify")
    settlement = _section(payload, "settlement")

    return TransactionRecord(
        status=status,
        track_id=_text(payload, "track_id"),
        id=_text(payload, "id"),
        order_id=_text(payload, "order_id"),
        amount=_amount(payload),
        date=_date(payload),
        payment=_payment_info(payment) if payment is not None else None,
        payer=_payer_info(payer) if payer is not None else None,
        wage=_wage_info(wage) if wage is not None else None,
        verify=VerifyInfo(date=_date(verify)) if verify is not None else None,
        settlement=_settlement_info(settlement) if settlement is not None else None,
    )


def decode_payment_creation(response: TransportResponse) -> PaymentCreationResult:
    """
    Decode a ``/payment`` response.

    ``success`` reflects the HTTP status (201 Created) only; the body is never
    consulted for it.
    """
    if is_created(response.status_code):
        payload = _load_object(response)
        return PaymentCreationResult(
            success=True,
            transaction_id=_text(payload, "id"),
            payment_link=_text(payload, "link"),
        )

    error = decode_error_body(response)
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    if not isinstance(payload, dict):
        payload = {}
    return PaymentCreationResult(
        success=False,
        transaction_id=_text(payload, "id"),
        payment_link=_text(payload, "link"),
        error_code=error.code,
        message=error.message,
    )


def decode_transaction(response: TransportResponse) -> TransactionRecord:
    """Decode a verify or inquiry response."""
    return _record(_load_object(response))


def decode_transaction_page(response: TransportResponse) -> TransactionPage:
    payload = _load_json(response)
    attachment: Mapping[str, Any] = {}
    records: List[Any]
    if isinstance(payload, list):
        records = payload
    elif isinstance(payload, dict):
        records = payload.get("records") or []
        attachment = _section(payload, "attachment") or {}
    else:
        raise ResponseDecodeError(
            f"Unexpected transaction list payload: {type(payload).__name__}"
        )

    decoded = []
    for item in records:
        if not isinstance(item, Mapping):
            raise ResponseDecodeError(f"Transaction must be an object, got {item!r}")
        decoded.append(_record(item))

    return TransactionPage(
        records=tuple(decoded),
        page=_int(attachment.get("page"), "page"),
        page_size=_int(attachment.get("page_size"), "page_size"),
        total_count=_int(attachment.get("total_count"), "total_count"),
    )


def decode_error_body(response: TransportResponse) -> ErrorBody:
    """
    Decode ``{"error_code": int, "message": str}`` (``code`` is accepted too).

    Never raises: an unreadable body becomes ``ErrorBody(code=None)`` with the
    raw text as message, which classifies as an unexpected error.
    """
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return ErrorBody(code=None, message=response.text.strip())
    if not isinstance(payload, dict):
        return ErrorBody(code=None, message=response.text.strip())

    raw_code = payload.get("error_code", payload.get("code"))
    try:
        code = _int(raw_code, "error_code")
    except ResponseDecodeError:
        code = None
    return ErrorBody(code=code, message=_text(payload, "message"))
