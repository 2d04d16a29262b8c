"""
Transport adapters executing built requests.

The client only depends on the ``Transport`` protocol: send a
``SignedRequest``, get back the status code and the raw body. Timeouts, TLS
and connection pooling belong to the concrete adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from exchanges.binance.errors import TransportError
from exchanges.binance.request_builder import SignedRequest


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw HTTP reply."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Anything able to execute a ``SignedRequest``."""

    def send(self, request: SignedRequest) -> TransportResponse:
        """Execute the request; raise ``TransportError`` when it cannot complete."""

    def close(self) -> None:
        """Release network resources."""


class HttpxTransport:
    """Blocking transport backed by ``httpx.Client``."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def send(self, request: SignedRequest) -> TransportResponse:
        try:
            response = self._client.request(
                request.method,
                request.url,
                content=request.body,
                headers=request.headers,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(
                f"{request.method} {_strip_query(request.url)} failed: {exc}"
            ) from exc
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def _strip_query(url: str) -> str:
    # Keep signatures out of error messages.
    return url.split("?", 1)[0]
