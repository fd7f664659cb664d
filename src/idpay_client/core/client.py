"""
Gateway operations: request a payment, verify it, inquire about it and list
transactions.

Every operation encodes an already-validated request, posts it through a
:class:`~idpay_client.core.transport.Transport` and returns a
:class:`GatewayOutcome` holding either the decoded record or the classified
error. Transport exceptions are not caught.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar, cast

import requests

from .config import GatewayConfig
from .errors import Classification, GatewayRequestError, classify
from .models import (
    PaymentCreationResult,
    PaymentRequest,
    TransactionListQuery,
    TransactionPage,
    TransactionQuery,
    TransactionRecord,
)
from .payloads import (
    build_inquiry_payload,
    build_payment_payload,
    build_transaction_list_payload,
    build_verify_payload,
)
from .responses import (
    decode_error_body,
    decode_payment_creation,
    decode_transaction,
    decode_transaction_page,
    is_created,
    is_success,
)
from .transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "GatewayClient",
    "GatewayOutcome",
    "inquire_transaction",
    "list_transactions",
    "request_payment",
    "verify_transaction",
]

T = TypeVar("T")


@dataclass(frozen=True)
class GatewayOutcome(Generic[T]):
    """
    Result of one gateway call.

    ``error`` is set exactly when the call failed. ``value`` is set on success,
    and for payment creation also on failure, where it holds the
    :class:`PaymentCreationResult` with ``success=False``.
    """

    status_code: int
    value: Optional[T] = None
    error: Optional[Classification] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise GatewayRequestError(self.error)
        return cast(T, self.value)


def _post(
    transport: Transport,
    url: str,
    body: Dict[str, Any],
    headers: Mapping[str, str],
) -> TransportResponse:
    logging.info("Submitting request to %s", url)
    response = transport.post(url, body, headers)
    logging.debug("Gateway answered %s from %s", response.status_code, url)
    return response


def _classify(response: TransportResponse) -> Classification:
    error = classify(response.status_code, decode_error_body(response))
    logging.warning("Gateway request failed: %s", error.describe())
    return error


def _run(
    transport: Transport,
    url: str,
    body: Dict[str, Any],
    headers: Mapping[str, str],
    decode: Callable[[TransportResponse], T],
) -> GatewayOutcome[T]:
    response = _post(transport, url, body, headers)
    if not is_success(response.status_code):
        return GatewayOutcome(status_code=response.status_code, error=_classify(response))
    return GatewayOutcome(status_code=response.status_code, value=decode(response))


def request_payment(
    transport: Transport,
    config: GatewayConfig,
    request: PaymentRequest,
) -> GatewayOutcome[PaymentCreationResult]:
    """
    Create a transaction and obtain the payment link.

    Only ``201 Created`` counts as success.
    """
    response = _post(
        transport, config.payment_url, build_payment_payload(request), config.headers()
    )
    result = decode_payment_creation(response)
    if is_created(response.status_code):
        return GatewayOutcome(status_code=response.status_code, value=result)
    return GatewayOutcome(
        status_code=response.status_code, value=result, error=_classify(response)
    )


def verify_transaction(
    transport: Transport,
    config: GatewayConfig,
    query: TransactionQuery,
) -> GatewayOutcome[TransactionRecord]:
    return _run(
        transport,
        config.verify_url,
        build_verify_payload(query),
        config.headers(),
        decode_transaction,
    )


def inquire_transaction(
    transport: Transport,
    config: GatewayConfig,
    query: TransactionQuery,
) -> GatewayOutcome[TransactionRecord]:
    return _run(
        transport,
        config.inquiry_url,
        build_inquiry_payload(query),
        config.headers(),
        decode_transaction,
    )


def list_transactions(
    transport: Transport,
    config: GatewayConfig,
    query: TransactionListQuery,
) -> GatewayOutcome[TransactionPage]:
    return _run(
        transport,
        config.transactions_url,
        build_transaction_list_payload(query),
        config.headers(),
        decode_transaction_page,
    )


class GatewayClient:
    """
    Thin convenience wrapper binding a configuration to a transport.

    Nothing on the instance changes after construction, so one client can be
    shared between threads.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        transport: Optional[Transport] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if transport is not None and session is not None:
            raise ValueError("Provide either a transport or a session, not both.")
        self.config = config
        self.transport: Transport = transport or RequestsTransport(
            session, timeout=config.timeout_seconds
        )

    @property
    def headers(self) -> Mapping[str, str]:
        return self.config.headers()

    def request_payment(
        self, request: PaymentRequest
    ) -> GatewayOutcome[PaymentCreationResult]:
        return request_payment(self.transport, self.config, request)

    def verify_transaction(self, query: TransactionQuery) -> GatewayOutcome[TransactionRecord]:
        return verify_transaction(self.transport, self.config, query)

    def inquire_transaction(
        self, query: TransactionQuery
    ) -> GatewayOutcome[TransactionRecord]:
        return inquire_transaction(self.transport, self.config, query)

    def list_transactions(
        self, query: TransactionListQuery
    ) -> GatewayOutcome[TransactionPage]:
        return list_transactions(self.transport, self.config, query)
