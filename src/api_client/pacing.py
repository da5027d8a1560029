"""
Rate-limiter policies for the batch sequencer.

The sequencer only calls ``pause()`` between items, so a policy can be
swapped (fixed delay, token bucket, something adaptive) without touching the
batch loop.
"""

from __future__ import annotations

import threading
import time
from typing import Protocol

from .cancellation import CancellationToken, wait
from .errors import InvalidParameterError


class PacingPolicy(Protocol):
    def pause(self, cancel_token: CancellationToken | None = None) -> None:
        ...


class FixedDelay:
    """Wait a constant number of seconds between consecutive items."""

    def __init__(self, seconds: float) -> None:
        if seconds < 0:
            raise InvalidParameterError(f"delay must be >= 0, got {seconds!r}")
        self.seconds = seconds

    def pause(self, cancel_token: CancellationToken | None = None) -> None:
        wait(self.seconds, cancel_token)

    def __repr__(self) -> str:
        return f"FixedDelay({self.seconds!r})"


class TokenBucket:
    """
    Allow bursts of up to ``capacity`` items, refilling at ``rate_per_second``.

    ``pause()`` consumes one token, sleeping only when the bucket is empty.
    The bucket starts full.
    """

    def __init__(self, rate_per_second: float, capacity: int = 1) -> None:
        if rate_per_second <= 0:
            raise InvalidParameterError(
                f"rate_per_second must be > 0, got {rate_per_second!r}"
            )
        if capacity < 1:
            raise InvalidParameterError(f"capacity must be >= 1, got {capacity!r}")
        self.rate = rate_per_second
        self.capacity = capacity
        self._tokens = float(capacity)
        self._updated = time.monotonic()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = max(0.0, now - self._updated)
        self._updated = now
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)

    def pause(self, cancel_token: CancellationToken | None = None) -> None:
        with self._lock:
            self._refill()
            if self._tokens >= 1:
                self._tokens -= 1
                return
            shortfall = (1 - self._tokens) / self.rate
            # The token that accrues during the wait is consumed by this call
            self._tokens = 0.0
            self._updated = time.monotonic() + shortfall
        wait(shortfall, cancel_token)

    def __repr__(self) -> str:
        return f"TokenBucket(rate_per_second={self.rate!r}, capacity={self.capacity!r})"
