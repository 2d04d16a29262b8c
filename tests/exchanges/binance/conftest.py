import json
from collections import deque

import pytest

from exchanges.binance.client import BinanceClient
from exchanges.binance.transport import TransportResponse

LOCAL_NOW_MS = 1_000_000.0


class FakeTransport:
    """Replays queued responses and records every request sent."""

    def __init__(self) -> None:
        self.requests = []
        self.closed = False
        self._responses = deque()

    def queue(self, body, status_code: int = 200) -> "FakeTransport":
        if not isinstance(body, str):
            body = json.dumps(body)
        self._responses.append(TransportResponse(status_code=status_code, body=body))
        return self

    def fail_with(self, exc: Exception) -> "FakeTransport":
        self._responses.append(exc)
        return self

    def send(self, request):
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        item = self._responses.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return BinanceClient("K", "S", transport=transport, clock=lambda: LOCAL_NOW_MS)


@pytest.fixture
def public_client(transport):
    return BinanceClient(transport=transport, clock=lambda: LOCAL_NOW_MS)
