"""
Abstract client definitions for centralized exchange integrations.

Concrete clients (``exchanges.binance.BinanceClient``) and decorators around
them (``exchanges.binance.LoggingBinanceClient``) both satisfy
`SpotExchangeClient`, so callers can swap one for the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable


@dataclass(slots=True)
class ExchangeCredentials:
    """Typed container for exchange authentication data."""

    api_key: str
    api_secret: str


@runtime_checkable
class SpotExchangeClient(Protocol):
    """Protocol describing the REST surface of a spot exchange client."""

    @property
    def last_request(self) -> Any:
        """The most recently built request, for introspection only."""

    def add_request_listener(self, listener: Callable[[Any], None]) -> None:
        """Register a callback invoked with every built request."""

    def ping(self) -> None:
        """Test connectivity."""

    def set_server_time(self) -> None:
        """Re-synchronise the local clock offset with the server."""

    def get_time(self) -> int:
        """Return the server time in milliseconds."""

    def get_exchange_info(self) -> dict:
        """Return trading rules and symbol information."""

    def get_depth(self, symbol: str, limit: Optional[int] = None) -> dict:
        """Return the order book for `symbol`."""

    def get_trades(self, symbol: str, limit: Optional[int] = None) -> list:
        """Return recent trades."""

    def get_historical_trades(
        self, symbol: str, from_id: Optional[int] = None, limit: Optional[int] = None
    ) -> list:
        """Return older trades."""

    def get_klines(
        self,
        symbol: str,
        interval: str,
        limit: Optional[int] = None,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
    ) -> list:
        """Return candlestick bars."""

    def get_ticker_24hr(self, symbol: Optional[str] = None) -> dict | list:
        """Return 24 hour statistics for one symbol or all of them."""

    def get_ticker_price(self, symbol: Optional[str] = None) -> dict | list:
        """Return the latest price for one symbol or all of them."""

    def get_ticker_book_ticker(self, symbol: Optional[str] = None) -> dict | list:
        """Return the best bid/ask for one symbol or all of them."""

    def get_open_orders(self, symbol: Optional[str] = None, recv_window: Optional[int] = None) -> list:
        """Return open orders."""

    def get_all_orders(
        self,
        symbol: Optional[str] = None,
        order_id: Optional[int] = None,
        limit: Optional[int] = None,
        recv_window: Optional[int] = None,
    ) -> list:
        """Return active, cancelled and filled orders."""

    def send_order(
        self,
        symbol: str,
        side: str,
        order_type: str,
        quantity: Any,
        price: Optional[float] = None,
        recv_window: Optional[int] = None,
        **options: Any,
    ) -> dict:
        """Submit a new order."""

    def cancel_order(
        self,
        symbol: str,
        order_id: Optional[int] = None,
        orig_client_order_id: Optional[str] = None,
        recv_window: Optional[int] = None,
    ) -> dict:
        """Cancel an active order."""

    def get_account(self, recv_window: Optional[int] = None) -> dict:
        """Return account information."""

    def get_my_trades(
        self,
        symbol: str,
        limit: Optional[int] = None,
        from_id: Optional[int] = None,
        recv_window: Optional[int] = None,
    ) -> list:
        """Return the account's trades for `symbol`."""

    def close(self) -> None:
        """Release network resources."""
