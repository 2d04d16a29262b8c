"""
Exception taxonomy for the Binance client.

Runtime failures derive from ``BinanceClientError`` so callers can branch on
the concrete kind. ``LogicError`` signals a programming defect and is kept
outside that hierarchy on purpose: it should not be caught and retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from exchanges.binance.request_builder import SignedRequest


class BinanceClientError(RuntimeError):
    """Base class for failures surfaced by the client."""

    def __init__(self, message: str, *, api: Optional[str] = None) -> None:
        super().__init__(message)
        self.api = api
        self.request: Optional["SignedRequest"] = None


class TransportError(BinanceClientError):
    """The HTTP exchange itself could not complete (DNS, TLS, connection, timeout)."""


class ServerResponseFormatError(BinanceClientError):
    """The response body is not JSON or does not have the expected shape."""

    def __init__(self, message: str, *, api: Optional[str] = None) -> None:
        super().__init__(f"API server returned illegal response: {message}", api=api)


class ApiErrorResponseError(BinanceClientError):
    """The server answered with an error payload instead of a result."""

    def __init__(
        self,
        api: Optional[str],
        code: Optional[int],
        message: str,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(f"api returned error response: {message}", api=api)
        self.code = code
        self.response_message = message
        self.status_code = status_code


class MissingCredentialsError(BinanceClientError):
    """A keyed or signed endpoint was called without the required credentials."""


class LogicError(RuntimeError):
    """Internal contract violation."""


class InvalidSecurityLevelError(LogicError):
    """The request builder received a security level it does not know."""
