"""
Request construction and HMAC-SHA256 signing for Binance REST calls.

The builder turns an endpoint spec and a parameter mapping into a
``SignedRequest``. It performs no network I/O; the server time offset is
obtained through the ``offset_provider`` callable only when a signed request
needs a timestamp.
"""

from __future__ import annotations

import hashlib
import hmac
import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from exchanges.binance.api import API_KEY_HEADER, BASE_URL, EndpointSpec, HttpMethod, SecurityLevel
from exchanges.binance.errors import InvalidSecurityLevelError, MissingCredentialsError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

OffsetProvider = Callable[[], int]
Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """Fully built HTTP request, ready for a transport."""

    url: str
    method: HttpMethod
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


def now_ms() -> float:
    """Local wall clock in milliseconds."""
    return time.time() * 1000


def format_timestamp(value: float) -> str:
    """Render milliseconds as base-10 integer text, rounding half up."""
    return str(int(math.floor(value + 0.5)))


def filter_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop absent values; insertion order is kept."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


def canonical_query(params: Mapping[str, Any]) -> str:
    """Encode parameters as the ``&``-joined ``key=value`` string that is both sent and signed."""
    if not params:
        return ""
    return str(httpx.QueryParams(params))


def sign_query(query: str, secret_key: str) -> str:
    mac = hmac.new(
        secret_key.encode("utf-8"),
        query.encode("utf-8"),
        hashlib.sha256,
    )
    return mac.hexdigest()


def build_request(
    endpoint: EndpointSpec,
    params: Optional[Mapping[str, Any]] = None,
    *,
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None,
    offset_provider: OffsetProvider = lambda: 0,
    base_url: str = BASE_URL,
    clock: Clock = now_ms,
) -> SignedRequest:
    """
    Build the request for ``endpoint``.

    NONE endpoints get a plain canonical query. TRADE and USER_DATA endpoints
    get a server-corrected ``timestamp`` appended, the query signed with the
    API secret, and the API key header. USER_STREAM and MARKET_DATA endpoints
    get the API key header but no timestamp or signature.

    GET and DELETE carry the string in the URL; POST carries it as a
    form-encoded body.
    """
    query_data = filter_params(params)
    headers: Dict[str, str] = {}
    level = endpoint.security_level

    if level is SecurityLevel.NONE:
        query = canonical_query(query_data)
    elif level is SecurityLevel.TRADE or level is SecurityLevel.USER_DATA:
        key = _require(api_key, "API key", endpoint)
        secret = _require(api_secret, "API secret", endpoint)
        query_data["timestamp"] = format_timestamp(clock() + offset_provider())
        query = canonical_query(query_data)
        query = f"{query}&signature={sign_query(query, secret)}"
        headers[API_KEY_HEADER] = key
    elif level is SecurityLevel.USER_STREAM or level is SecurityLevel.MARKET_DATA:
        headers[API_KEY_HEADER] = _require(api_key, "API key", endpoint)
        query = canonical_query(query_data)
    else:
        raise InvalidSecurityLevelError(f"Invalid security type: {level!r}")

    url = f"{base_url.rstrip('/')}{endpoint.path}"
    body: Optional[str] = None
    if endpoint.method == "POST":
        if query:
            body = query
            headers["Content-Type"] = FORM_CONTENT_TYPE
    elif query:
        url = f"{url}?{query}"

    return SignedRequest(url=url, method=endpoint.method, headers=headers, body=body)


def _require(value: Optional[str], label: str, endpoint: EndpointSpec) -> str:
    if not value:
        raise MissingCredentialsError(
            f"{label} is required for {endpoint.security_level.value} endpoint {endpoint.path}",
            api=endpoint.path,
        )
    return value
