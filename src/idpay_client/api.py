"""
Public, high-level helpers for talking to the IDPay gateway.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import GatewayClient, GatewayOutcome
from .core.config import GatewayConfig, GatewayParameters, load_gateway_config
from .core.models import PaymentCreationResult, PaymentRequest
from .core.transport import Transport

__all__ = [
    "create_gateway_client",
    "send_payment_request",
]


def create_gateway_client(
    *,
    config: Optional[GatewayConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    api_key: Optional[str] = None,
    sandbox: Optional[bool] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> GatewayClient:
    """
    Construct a :class:`GatewayClient`.

    Callers can either supply a ready-made :class:`GatewayConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            api_key,
            sandbox,
            base_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built GatewayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_gateway_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            api_key=api_key,
            sandbox=sandbox,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )
    return GatewayClient(cfg, transport=transport, session=session)


def send_payment_request(
    request: PaymentRequest,
    *,
    config: Optional[GatewayConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
) -> GatewayOutcome[PaymentCreationResult]:
    """
    One-shot helper: build a client from ``config`` or the environment and
    create a payment with it.
    """
    client = create_gateway_client(
        config=config,
        transport=transport,
        session=session,
        env_file=env_file,
        overrides=overrides,
    )
    return client.request_payment(request)
