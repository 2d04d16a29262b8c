"""
Logging decorator for Binance clients.

Wraps any object satisfying ``SpotExchangeClient`` and logs the start, end
and failure of every public call, plus each request URL as it is built.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Any, Optional

from exchanges.base_client import SpotExchangeClient
from exchanges.binance.errors import BinanceClientError
from exchanges.binance.request_builder import SignedRequest

_SIGNATURE_RE = re.compile(r"(signature=)[0-9a-fA-F]+")
_PASSTHROUGH = frozenset({"add_request_listener", "close"})


def redact_signature(text: str) -> str:
    return _SIGNATURE_RE.sub(r"\1***", text)


class LoggingBinanceClient:
    """Delegate every call to ``client`` and log around it."""

    def __init__(self, client: SpotExchangeClient, logger: Optional[logging.Logger] = None) -> None:
        self._client = client
        self._logger = logger or logging.getLogger(__name__)
        client.add_request_listener(self._on_request_created)

    @property
    def client(self) -> SpotExchangeClient:
        return self._client

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._client, name)
        if name.startswith("_") or name in _PASSTHROUGH or not callable(attr):
            return attr

        @functools.wraps(attr)
        def logged(*args: Any, **kwargs: Any) -> Any:
            self._logger.debug("started %s", name)
            try:
                result = attr(*args, **kwargs)
            except BinanceClientError as exc:
                self._logger.error("failed %s: %s", name, exc)
                raise
            self._logger.debug("finished %s", name)
            return result

        return logged

    def __enter__(self) -> "LoggingBinanceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._client.close()

    def _on_request_created(self, request: SignedRequest) -> None:
        self._logger.debug("request created: %s %s", request.method, redact_signature(request.url))
        if request.body:
            self._logger.debug("request body: %s", redact_signature(request.body))
