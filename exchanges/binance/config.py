"""
Binance client configuration resolved from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from exchanges.base_client import ExchangeCredentials
from exchanges.binance.api import BASE_URL

DEFAULT_TIMEOUT = 10.0
DEFAULT_RECV_WINDOW = 60000


@dataclass(slots=True)
class BinanceConfig:
    """Connection settings and optional credentials."""

    base_url: str = BASE_URL
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    recv_window: int = DEFAULT_RECV_WINDOW

    @property
    def credentials(self) -> ExchangeCredentials | None:
        if not self.api_key or not self.api_secret:
            return None
        return ExchangeCredentials(api_key=self.api_key, api_secret=self.api_secret)

    @staticmethod
    def from_env() -> "BinanceConfig":
        # Environment first, then the optional local config module, then defaults.
        try:
            import config as config_module  # type: ignore
        except ModuleNotFoundError:
            config_module = None  # type: ignore

        def lookup(name: str, default):
            value = os.getenv(name)
            if value:
                return value
            if config_module is not None:
                configured = getattr(config_module, name, None)
                if configured not in (None, ""):
                    return configured
            return default

        try:
            timeout = float(lookup("BINANCE_TIMEOUT", DEFAULT_TIMEOUT))
            recv_window = int(lookup("BINANCE_RECV_WINDOW", DEFAULT_RECV_WINDOW))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid Binance timeout/recvWindow setting: {exc}") from exc

        return BinanceConfig(
            base_url=str(lookup("BINANCE_BASE_URL", BASE_URL)),
            api_key=lookup("BINANCE_API_KEY", None),
            api_secret=lookup("BINANCE_API_SECRET", None),
            timeout=timeout,
            recv_window=recv_window,
        )
