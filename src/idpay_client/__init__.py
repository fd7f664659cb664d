"""
Public facade for the IDPay gateway client.

The most useful pieces are re-exported here so integrators can
``from idpay_client import ...`` without navigating the package.
"""

from .api import create_gateway_client, send_payment_request
from .core import (
    ClassificationFailure,
    ConfigError,
    DateRange,
    ErrorKind,
    GatewayClient,
    GatewayConfig,
    GatewayError,
    GatewayOutcome,
    GatewayParameters,
    GatewayRequestError,
    PaymentCreationResult,
    PaymentRequest,
    RequestsTransport,
    ResponseDecodeError,
    TransactionListQuery,
    TransactionPage,
    TransactionQuery,
    TransactionRecord,
    TransactionStatus,
    Transport,
    TransportResponse,
    ValidationError,
    classify,
    inquire_transaction,
    list_transactions,
    load_gateway_config,
    request_payment,
    verify_transaction,
)

__all__ = (
    "ClassificationFailure",
    "ConfigError",
    "DateRange",
    "ErrorKind",
    "GatewayClient",
    "GatewayConfig",
    "GatewayError",
    "GatewayOutcome",
    "GatewayParameters",
    "GatewayRequestError",
    "PaymentCreationResult",
    "PaymentRequest",
    "RequestsTransport",
    "ResponseDecodeError",
    "TransactionListQuery",
    "TransactionPage",
    "TransactionQuery",
    "TransactionRecord",
    "TransactionStatus",
    "Transport",
    "TransportResponse",
    "ValidationError",
    "classify",
    "create_gateway_client",
    "inquire_transaction",
    "list_transactions",
    "load_gateway_config",
    "request_payment",
    "send_payment_request",
    "verify_transaction",
)
