"""
Core primitives: validation, wire encoding, error classification and the
gateway operations built on them.
"""

from .client import (
    GatewayClient,
    GatewayOutcome,
    inquire_transaction,
    list_transactions,
    request_payment,
    verify_transaction,
)
from .config import (
    ConfigError,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from .environment import GatewayEnvironment, build_environment, load_env_file
from .errors import (
    ClassificationFailure,
    ErrorBody,
    ErrorKind,
    GatewayError,
    GatewayRequestError,
    classify,
)
from .models import (
    DateRange,
    PayerInfo,
    PaymentCreationResult,
    PaymentInfo,
    PaymentRequest,
    SettlementInfo,
    TransactionListQuery,
    TransactionPage,
    TransactionQuery,
    TransactionRecord,
    TransactionStatus,
    VerifyInfo,
    WageInfo,
)
from .payloads import (
    build_inquiry_payload,
    build_payment_payload,
    build_transaction_list_payload,
    build_verify_payload,
)
from .responses import ResponseDecodeError
from .transport import RequestsTransport, Transport, TransportResponse
from .validation import ValidationError

__all__ = [
    "ClassificationFailure",
    "ConfigError",
    "DateRange",
    "ErrorBody",
    "ErrorKind",
    "GatewayClient",
    "GatewayConfig",
    "GatewayEnvironment",
    "GatewayError",
    "GatewayOutcome",
    "GatewayParameters",
    "GatewayRequestError",
    "PayerInfo",
    "PaymentCreationResult",
    "PaymentInfo",
    "PaymentRequest",
    "RequestsTransport",
    "ResponseDecodeError",
    "SettlementInfo",
    "TransactionListQuery",
    "TransactionPage",
    "TransactionQuery",
    "TransactionRecord",
    "TransactionStatus",
    "Transport",
    "TransportResponse",
    "ValidationError",
    "VerifyInfo",
    "WageInfo",
    "build_environment",
    "build_inquiry_payload",
    "build_payment_payload",
    "build_transaction_list_payload",
    "build_verify_payload",
    "classify",
    "inquire_transaction",
    "list_transactions",
    "load_env_file",
    "load_gateway_config",
    "request_payment",
    "verify_transaction",
]
