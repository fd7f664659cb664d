"""
Helpers for constructing the JSON payloads sent to the IDPay gateway.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .models import DateRange, PaymentRequest, TransactionListQuery, TransactionQuery
from .validation import normalize_email, normalize_phone

__all__ = [
    "build_inquiry_payload",
    "build_payment_payload",
    "build_transaction_list_payload",
    "build_verify_payload",
]


def _text(value: Optional[str]) -> str:
    return value if value else ""


def _date_range(value: DateRange) -> Dict[str, int]:
    return {"min": value.min, "max": value.max}


def build_payment_payload(request: PaymentRequest) -> Dict[str, Any]:
    """
    Build the body for ``/payment``.

    Missing optional fields are sent as empty strings. Phone numbers and email
    addresses that do not look valid are dropped to ``""`` rather than rejected.
    """
    return {
        "order_id": request.order_id,
        "amount": request.amount,
        "name": _text(request.name),
        "phone": normalize_phone(request.phone),
        "mail": normalize_email(request.email),
        "desc": _text(request.description),
        "callback": request.callback,
    }


def build_verify_payload(query: TransactionQuery) -> Dict[str, Any]:
    return {"id": query.transaction_id, "order_id": query.order_id}


def build_inquiry_payload(query: TransactionQuery) -> Dict[str, Any]:
    return {"id": query.transaction_id, "order_id": query.order_id}


def build_transaction_list_payload(query: TransactionListQuery) -> Dict[str, Any]:
    """
    Build the body for ``/payment/transactions``.

    Text filters default to ``""``; numeric and structured filters are left out
    entirely when unset.
    """
    body: Dict[str, Any] = {
        "page": query.page,
        "page_size": query.page_size,
        "id": _text(query.transaction_id),
        "order_id": _text(query.order_id),
        "track_id": _text(query.track_id),
        "payment_card_no": _text(query.card_no),
        "payment_hashed_card_no": _text(query.hashed_card_no),
    }
    if query.amount is not None:
        body["amount"] = query.amount
    if query.statuses:
        body["status"] = list(query.statuses)
    if query.payment_date is not None:
        body["payment_date"] = _date_range(query.payment_date)
    if query.settlement_date is not None:
        body["settlement_date"] = _date_range(query.settlement_date)
    return body
