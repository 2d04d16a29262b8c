"""
Binance spot REST adapter.

Submodules split the request pipeline: endpoint catalogue (``api``), signing
(``request_builder``), clock offset (``time_sync``), transport, decoding and
the ``BinanceClient`` facade.
"""

from .api import BASE_URL, ENDPOINTS, EndpointSpec, ResponseShape, SecurityLevel, classify  # noqa: F401
from .client import BinanceClient  # noqa: F401
from .config import BinanceConfig  # noqa: F401
from .errors import (  # noqa: F401
    ApiErrorResponseError,
    BinanceClientError,
    InvalidSecurityLevelError,
    LogicError,
    MissingCredentialsError,
    ServerResponseFormatError,
    TransportError,
)
from .logging_client import LoggingBinanceClient  # noqa: F401
from .request_builder import SignedRequest, build_request  # noqa: F401
from .transport import HttpxTransport, Transport, TransportResponse  # noqa: F401
