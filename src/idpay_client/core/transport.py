"""
The HTTP boundary of the client.

The gateway operations only need "POST this JSON, give me the status code and
body back"; anything that provides that can be injected in place of
:class:`RequestsTransport`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

import requests

__all__ = [
    "RequestsTransport",
    "Transport",
    "TransportResponse",
]


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


class Transport(Protocol):
    def post(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Mapping[str, str],
    ) -> TransportResponse:
        ...


class RequestsTransport:
    """
    :class:`Transport` backed by a :class:`requests.Session`.

    Headers are passed per request; the session's own headers are never
    modified, so one session can be shared between differently configured
    clients. Connection errors and timeouts are raised as-is.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: float = 30,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def post(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Mapping[str, str],
    ) -> TransportResponse:
        response = self.session.post(
            url, json=body, headers=dict(headers), timeout=self.timeout
        )
        return TransportResponse(status_code=response.status_code, body=response.content)
