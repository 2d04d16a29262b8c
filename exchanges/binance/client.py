"""
Binance spot REST client.

Each public method maps to one endpoint of ``exchanges.binance.api.ENDPOINTS``
and runs the same pipeline: assemble parameters, build (and sign) the
request, send it through the transport, then check and decode the reply.

Optional arguments follow a truthiness rule inherited from the upstream
wire behaviour: an optional value that is ``None``, ``0`` or ``""`` is left
out of the request entirely, so ``limit=0`` cannot be sent through these
methods.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional

from exchanges.base_client import ExchangeCredentials
from exchanges.binance.api import BASE_URL, ENDPOINTS, ResponseShape
from exchanges.binance.config import DEFAULT_RECV_WINDOW, DEFAULT_TIMEOUT, BinanceConfig
from exchanges.binance.decoder import Decoded, check_api_error, decode, json_type_name
from exchanges.binance.errors import BinanceClientError, ServerResponseFormatError
from exchanges.binance.request_builder import Clock, SignedRequest, build_request, now_ms
from exchanges.binance.time_sync import ServerTimeSynchronizer
from exchanges.binance.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

RequestListener = Callable[[SignedRequest], None]


def _truthy(**params: Any) -> Dict[str, Any]:
    """Keep optional parameters whose value is truthy."""
    return {key: value for key, value in params.items() if value}


def format_price(price: Any) -> str:
    """Fixed-point price text with eight decimals."""
    return f"{Decimal(str(price)):.8f}"


class BinanceClient:
    """
    Blocking client for the Binance spot REST API.

    The instance owns two pieces of mutable state, the server time offset and
    the last built request, neither of which is guarded by a lock. Use one
    client per thread.
    """

    name = "binance"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        *,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[Transport] = None,
        clock: Clock = now_ms,
        order_recv_window: int = DEFAULT_RECV_WINDOW,
    ) -> None:
        self._api_key = api_key
        self._api_secret = api_secret
        self._base_url = base_url
        self._clock = clock
        self._transport: Transport = transport or HttpxTransport(timeout=timeout)
        self._order_recv_window = order_recv_window
        self._time_sync = ServerTimeSynchronizer(self.get_time, clock=clock)
        self._last_request: Optional[SignedRequest] = None
        self._request_listeners: List[RequestListener] = []

    @classmethod
    def from_config(cls, config: BinanceConfig, **kwargs: Any) -> "BinanceClient":
        return cls(
            config.api_key,
            config.api_secret,
            base_url=config.base_url,
            timeout=config.timeout,
            order_recv_window=config.recv_window,
            **kwargs,
        )

    @classmethod
    def from_credentials(cls, credentials: ExchangeCredentials, **kwargs: Any) -> "BinanceClient":
        return cls(credentials.api_key, credentials.api_secret, **kwargs)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def last_request(self) -> Optional[SignedRequest]:
        return self._last_request

    @property
    def time_offset(self) -> int:
        return self._time_sync.offset

    @property
    def time_sync(self) -> ServerTimeSynchronizer:
        return self._time_sync

    def add_request_listener(self, listener: RequestListener) -> None:
        """Register a callback invoked with every request right after it is built."""
        if not callable(listener):
            raise TypeError("request listener must be callable")
        self._request_listeners.append(listener)

    # ------------------------------------------------------------------
    # Public endpoints
    # ------------------------------------------------------------------
    def ping(self) -> None:
        self._call("ping")

    def set_server_time(self) -> None:
        """Force a re-synchronisation of the server time offset."""
        self._time_sync.sync()

    def get_time(self) -> int:
        payload = self._call("time")
        server_time = payload.get("serverTime")
        if isinstance(server_time, bool) or not isinstance(server_time, (int, float)):
            error = ServerResponseFormatError(
                f"serverTime must be a number, but returned: {json_type_name(server_time)}",
                api=ENDPOINTS["time"].path,
            )
            error.request = self._last_request
            raise error
        return int(server_time)

    def get_exchange_info(self) -> dict:
        return self._call("exchange_info")

    def get_depth(self, symbol: str, limit: Optional[int] = None) -> dict:
        params = {"symbol": symbol, **_truthy(limit=limit)}
        return self._call("depth", params)

    def get_trades(self, symbol: str, limit: Optional[int] = None) -> list:
        params = {"symbol": symbol, **_truthy(limit=limit)}
        return self._call("trades", params)

    def get_historical_trades(
        self,
        symbol: str,
        from_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list:
        params = {"symbol": symbol, **_truthy(fromId=from_id, limit=limit)}
        return self._call("historical_trades", params)

    def get_klines(
        self,
        symbol: str,
        interval: str,
        limit: Optional[int] = None,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
    ) -> list:
        params = {
            "symbol": symbol,
            "interval": interval,
            **_truthy(limit=limit, startTime=start_time, endTime=end_time),
        }
        return self._call("klines", params)

    def get_ticker_24hr(self, symbol: Optional[str] = None) -> dict | list:
        """Single object when filtered by ``symbol``, array of objects otherwise."""
        return self._call_by_symbol("ticker_24hr", symbol)

    def get_ticker_price(self, symbol: Optional[str] = None) -> dict | list:
        return self._call_by_symbol("ticker_price", symbol)

    def get_ticker_book_ticker(self, symbol: Optional[str] = None) -> dict | list:
        return self._call_by_symbol("ticker_book_ticker", symbol)

    # ------------------------------------------------------------------
    # Private endpoints
    # ------------------------------------------------------------------
    def get_open_orders(self, symbol: Optional[str] = None, recv_window: Optional[int] = None) -> list:
        return self._call("open_orders", _truthy(symbol=symbol, recvWindow=recv_window))

    def get_all_orders(
        self,
        symbol: Optional[str] = None,
        order_id: Optional[int] = None,
        limit: Optional[int] = None,
        recv_window: Optional[int] = None,
    ) -> list:
        params = _truthy(symbol=symbol, orderId=order_id, limit=limit, recvWindow=recv_window)
        return self._call("all_orders", params)

    def send_order(
        self,
        symbol: str,
        side: str,
        order_type: str,
        quantity: Any,
        price: Optional[Any] = None,
        recv_window: Optional[int] = None,
        **options: Any,
    ) -> dict:
        """
        Submit a new order.

        ``recvWindow`` is always sent, falling back to the client's default
        when ``recv_window`` is not given. ``price`` is sent with eight
        decimals. Extra ``options`` (timeInForce, newClientOrderId, stopPrice,
        icebergQty, newOrderRespType, ...) are merged last and may override
        any earlier key.
        """
        params: Dict[str, Any] = {
            "symbol": symbol,
            "side": side,
            "type": order_type,
            "quantity": quantity,
            "recvWindow": recv_window or self._order_recv_window,
        }
        if price:
            params["price"] = format_price(price)
        params.update(options)
        return self._call("new_order", params)

    def cancel_order(
        self,
        symbol: str,
        order_id: Optional[int] = None,
        orig_client_order_id: Optional[str] = None,
        recv_window: Optional[int] = None,
    ) -> dict:
        params = {
            "symbol": symbol,
            **_truthy(
                orderId=order_id,
                origClientOrderId=orig_client_order_id,
                recvWindow=recv_window,
            ),
        }
        return self._call("cancel_order", params)

    def get_account(self, recv_window: Optional[int] = None) -> dict:
        return self._call("account", _truthy(recvWindow=recv_window))

    def get_my_trades(
        self,
        symbol: str,
        limit: Optional[int] = None,
        from_id: Optional[int] = None,
        recv_window: Optional[int] = None,
    ) -> list:
        params = {"symbol": symbol, **_truthy(limit=limit, fromId=from_id, recvWindow=recv_window)}
        return self._call("my_trades", params)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "BinanceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _call_by_symbol(self, name: str, symbol: Optional[str]) -> dict | list:
        shape = ENDPOINTS[name].response_shape.resolve(filtered=bool(symbol))
        return self._call(name, _truthy(symbol=symbol), shape=shape)

    def _call(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        shape: Optional[ResponseShape] = None,
    ) -> Any:
        endpoint = ENDPOINTS[name]
        request = build_request(
            endpoint,
            params,
            api_key=self._api_key,
            api_secret=self._api_secret,
            offset_provider=self._time_sync.current_offset,
            base_url=self._base_url,
            clock=self._clock,
        )
        self._last_request = request
        for listener in self._request_listeners:
            listener(request)

        logger.debug("Binance %s %s", request.method, endpoint.path)
        try:
            response = self._transport.send(request)
            check_api_error(response, api=endpoint.path)
            result: Decoded = decode(response.body, shape or endpoint.response_shape, api=endpoint.path)
        except BinanceClientError as exc:
            if exc.api is None:
                exc.api = endpoint.path
            if exc.request is None:
                exc.request = request
            logger.warning("Binance %s %s failed: %s", request.method, endpoint.path, exc)
            raise
        return result
