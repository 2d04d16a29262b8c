"""
Binance REST endpoint catalogue and security classification.

Every supported operation is described by a static ``EndpointSpec``: path,
HTTP method, the security level deciding how the request is authenticated,
and the JSON shape the reply must have.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Literal, Union

BASE_URL = "https://api.binance.com"

API_KEY_HEADER = "X-MBX-APIKEY"

HttpMethod = Literal["GET", "POST", "DELETE"]


class SecurityLevel(str, Enum):
    """Authentication requirement attached to an endpoint."""

    NONE = "NONE"
    TRADE = "TRADE"
    USER_DATA = "USER_DATA"
    USER_STREAM = "USER_STREAM"
    MARKET_DATA = "MARKET_DATA"

    @property
    def signed(self) -> bool:
        """Requests carry ``timestamp`` and ``signature``."""
        return self in (SecurityLevel.TRADE, SecurityLevel.USER_DATA)

    @property
    def keyed(self) -> bool:
        """Requests carry the API key header."""
        return self is not SecurityLevel.NONE


class ResponseShape(str, Enum):
    """Expected JSON container returned by an endpoint."""

    ARRAY = "array"
    OBJECT = "object"
    # Either container; ping answers with an empty object.
    CONTAINER = "container"
    # Object when filtered by symbol, array of objects otherwise.
    CONDITIONAL = "conditional"

    def resolve(self, filtered: bool) -> "ResponseShape":
        if self is ResponseShape.CONDITIONAL:
            return ResponseShape.OBJECT if filtered else ResponseShape.ARRAY
        return self


@dataclass(frozen=True, slots=True)
class EndpointSpec:
    """Static description of a single REST operation."""

    name: str
    path: str
    method: HttpMethod
    security_level: SecurityLevel
    response_shape: ResponseShape


def _spec(
    name: str,
    path: str,
    security_level: SecurityLevel,
    response_shape: ResponseShape,
    method: HttpMethod = "GET",
) -> EndpointSpec:
    return EndpointSpec(name, path, method, security_level, response_shape)


ENDPOINTS: Dict[str, EndpointSpec] = {
    spec.name: spec
    for spec in (
        # public
        _spec("ping", "/api/v1/ping", SecurityLevel.NONE, ResponseShape.CONTAINER),
        _spec("time", "/api/v1/time", SecurityLevel.NONE, ResponseShape.OBJECT),
        _spec("exchange_info", "/api/v1/exchangeInfo", SecurityLevel.NONE, ResponseShape.OBJECT),
        _spec("depth", "/api/v1/depth", SecurityLevel.NONE, ResponseShape.OBJECT),
        _spec("trades", "/api/v1/trades", SecurityLevel.NONE, ResponseShape.ARRAY),
        _spec(
            "historical_trades",
            "/api/v1/historicalTrades",
            SecurityLevel.MARKET_DATA,
            ResponseShape.ARRAY,
        ),
        _spec("klines", "/api/v1/klines", SecurityLevel.NONE, ResponseShape.ARRAY),
        _spec("ticker_24hr", "/api/v1/ticker/24hr", SecurityLevel.NONE, ResponseShape.CONDITIONAL),
        _spec("ticker_price", "/api/v3/ticker/price", SecurityLevel.NONE, ResponseShape.CONDITIONAL),
        _spec(
            "ticker_book_ticker",
            "/api/v3/ticker/bookTicker",
            SecurityLevel.NONE,
            ResponseShape.CONDITIONAL,
        ),
        # private
        _spec("open_orders", "/api/v3/openOrders", SecurityLevel.USER_DATA, ResponseShape.ARRAY),
        _spec("all_orders", "/api/v3/allOrders", SecurityLevel.USER_DATA, ResponseShape.ARRAY),
        _spec("new_order", "/api/v3/order", SecurityLevel.TRADE, ResponseShape.OBJECT, "POST"),
        _spec("cancel_order", "/api/v3/order", SecurityLevel.TRADE, ResponseShape.OBJECT, "DELETE"),
        _spec("account", "/api/v3/account", SecurityLevel.USER_DATA, ResponseShape.OBJECT),
        _spec("my_trades", "/api/v3/myTrades", SecurityLevel.USER_DATA, ResponseShape.ARRAY),
    )
}


def classify(endpoint: Union[str, EndpointSpec]) -> SecurityLevel:
    """Return the security level of an endpoint given by name or spec."""
    if isinstance(endpoint, EndpointSpec):
        return endpoint.security_level
    return ENDPOINTS[endpoint].security_level
