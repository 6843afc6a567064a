"""Sliding-Window Rate Limiter — per-client request counters shared across concurrent requests.

Invariants:
    - A client may make at most max_requests allowed hits in any window_seconds span
    - Rejected hits are NOT recorded (a client that backs off recovers as the window slides)
    - All counter access goes through one asyncio.Lock (safe under concurrent requests)
    - reset() clears every counter; called on app shutdown

Design Decisions:
    - Timestamp deque per client over fixed buckets: exact sliding window, memory is
      bounded by max_requests per active client
    - Clock injectable: tests drive time without sleeping
    - Idle clients swept every SWEEP_INTERVAL hits so the key space does not grow unbounded
"""

import asyncio
import math
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

SWEEP_INTERVAL: int = 1000


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one hit against a limiter."""
    allowed: bool
    limit: int
    remaining: int
    reset_after_seconds: int


class SlidingWindowRateLimiter:
    """Counts hits per key over a rolling window."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        message: str,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = asyncio.Lock()
        self._hits_since_sweep = 0

    async def hit(self, key: str) -> RateLimitDecision:
        """Record a hit for key if the window has room."""
        async with self._lock:
            now = self._clock()
            window = self._hits.setdefault(key, deque())
            self._evict(window, now)

            allowed = len(window) < self.max_requests
            if allowed:
                window.append(now)

            self._hits_since_sweep += 1
            if self._hits_since_sweep >= SWEEP_INTERVAL:
                self._sweep(now)

            reset_after = (
                window[0] + self.window_seconds - now if window else self.window_seconds
            )
            return RateLimitDecision(
                allowed=allowed,
                limit=self.max_requests,
                remaining=max(self.max_requests - len(window), 0),
                reset_after_seconds=max(math.ceil(reset_after), 0),
            )

    async def reset(self) -> None:
        async with self._lock:
            self._hits.clear()
            self._hits_since_sweep = 0

    def _evict(self, window: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while window and window[0] <= cutoff:
            window.popleft()

    def _sweep(self, now: float) -> None:
        for key in list(self._hits):
            window = self._hits[key]
            self._evict(window, now)
            if not window:
                del self._hits[key]
        self._hits_since_sweep = 0

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)
