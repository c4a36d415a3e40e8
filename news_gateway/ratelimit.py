"""
Fixed-window request limiting per client.

The counter resets on a fixed boundary (`reset_at`) rather than sliding, so a
burst straddling a boundary can admit up to 2 x max_requests in a short span.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Mapping

from .exceptions import RateLimitExceeded
from .models import RateWindow

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def client_identifier(headers: Mapping[str, str]) -> str:
    """
    Derive the rate-limit key from forwarded-address headers.

    `headers` should be case-insensitive. Only the first (originating) hop of
    X-Forwarded-For is used.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    for name in ("x-real-ip", "remote-addr"):
        value = headers.get(name)
        if value and value.strip():
            return value.strip()
    return UNKNOWN_CLIENT


class RateLimiter:
    def __init__(self, max_requests: int = 10, window: float = 60.0, *,
                 max_clients: int = 10000,
                 clock: Callable[[], float] = time.time) -> None:
        self.max_requests = max_requests
        self.window = window
        self.max_clients = max_clients
        self._clock = clock
        self._windows: Dict[str, RateWindow] = {}
        # dispatch runs in a thread pool
        self._lock = threading.Lock()

    def admit(self, client_id: str) -> bool:
        with self._lock:
            now = self._clock()
            current = self._windows.get(client_id)

            if current is None or now >= current.reset_at:
                self._windows[client_id] = RateWindow(count=1, reset_at=now + self.window)
                if current is None and len(self._windows) > self.max_clients:
                    self._sweep(now)
                return True

            if current.count < self.max_requests:
                current.count += 1
                return True

            return False

    def check(self, client_id: str) -> None:
        """Like `admit`, but raises RateLimitExceeded on rejection."""
        if not self.admit(client_id):
            raise RateLimitExceeded(client_id, retry_after=int(self.window))

    def sweep(self) -> int:
        """Drop windows that have already expired. Returns how many were dropped."""
        with self._lock:
            return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        expired = [cid for cid, w in self._windows.items() if now >= w.reset_at]
        for cid in expired:
            del self._windows[cid]
        if expired:
            logger.debug("Swept %d expired rate windows", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)
