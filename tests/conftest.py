"""
Shared fixtures for the IDPay client tests.
"""

import json
from typing import Any, Dict, List, Mapping, Tuple

import pytest

from idpay_client import GatewayConfig, TransportResponse


def make_response(status_code: int, payload: Any = None) -> TransportResponse:
    if payload is None:
        return TransportResponse(status_code=status_code)
    if isinstance(payload, (bytes, str)):
        body = payload.encode("utf-8") if isinstance(payload, str) else payload
        return TransportResponse(status_code=status_code, body=body)
    return TransportResponse(
        status_code=status_code, body=json.dumps(payload).encode("utf-8")
    )


class FakeTransport:
    """Replays queued responses and records what was posted."""

    def __init__(self, *responses: TransportResponse) -> None:
        self.responses = list(responses)
        self.calls: List[Tuple[str, Dict[str, Any], Dict[str, str]]] = []

    def post(
        self, url: str, body: Dict[str, Any], headers: Mapping[str, str]
    ) -> TransportResponse:
        self.calls.append((url, body, dict(headers)))
        return self.responses.pop(0)


@pytest.fixture
def config():
    return GatewayConfig(api_key="test-api-key")


@pytest.fixture
def sandbox_config():
    return GatewayConfig(api_key="test-api-key", sandbox=True)


@pytest.fixture
def verified_transaction():
    return {
        "status": 100,
        "track_id": "10012",
        "id": "d2e353189823079e1e4181772cff5292",
        "order_id": "101",
        "amount": "10000",
        "date": "1546288200",
        "payment": {
            "track_id": "888001",
            "amount": "10000",
            "card_no": "123456******1234",
            "hashed_card_no": "E59FA6241C94B8836E3D03120DF33E80FD988888BBA0A122240C2E7D23B48295",
            "date": "1546288500",
        },
        "verify": {"date": "1546288800"},
    }
