"""
Server clock offset tracking for signed requests.
"""

from __future__ import annotations

import logging
from typing import Callable

from exchanges.binance.request_builder import Clock, now_ms

logger = logging.getLogger(__name__)

UNSYNCHRONIZED = 0


class ServerTimeSynchronizer:
    """
    Keep ``serverTime - localTime`` in milliseconds.

    The offset is established lazily: reading it while it is still 0 triggers
    a ``sync()``. A genuine zero skew is indistinguishable from "never
    synchronised", so it is re-fetched on every read. Not thread-safe.
    """

    def __init__(self, fetch_server_time: Callable[[], float], *, clock: Clock = now_ms) -> None:
        self._fetch_server_time = fetch_server_time
        self._clock = clock
        self._offset: int = UNSYNCHRONIZED

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def synchronized(self) -> bool:
        return self._offset != UNSYNCHRONIZED

    def sync(self) -> int:
        """Fetch the server time and store the new offset."""
        server_time = self._fetch_server_time()
        self._offset = round(server_time - self._clock())
        logger.info("Binance server time offset set to %d ms", self._offset)
        return self._offset

    def current_offset(self) -> int:
        if self._offset == UNSYNCHRONIZED:
            self.sync()
        return self._offset

    def reset(self) -> None:
        self._offset = UNSYNCHRONIZED
