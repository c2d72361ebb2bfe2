"""Fixed-window, per-caller rate limiting for tool execution."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(slots=True)
class RateLimitCounter:
    window_start: float
    count: int = 0


class RateLimiter:
    """Allow ``max_calls`` per caller identity within each ``window_seconds`` window."""

    def __init__(
        self,
        max_calls: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        max_tracked: int = 10_000,
    ) -> None:
        if max_calls < 1:
            raise ValueError("max_calls must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if max_tracked < 1:
            raise ValueError("max_tracked must be at least 1")
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self._clock = clock
        self._max_tracked = max_tracked
        self._counters: dict[str, RateLimitCounter] = {}
        self._lock = asyncio.Lock()

    async def check(self, caller: str) -> bool:
        """Count one call for ``caller``; False once the window's budget is spent."""

        async with self._lock:
            now = self._clock()
            counter = self._counters.get(caller)
            if counter is None or now - counter.window_start >= self.window_seconds:
                # Re-insert so the map stays ordered by window start.
                self._counters.pop(caller, None)
                if len(self._counters) >= self._max_tracked:
                    self._evict(now)
                counter = RateLimitCounter(window_start=now)
                self._counters[caller] = counter

            if counter.count >= self.max_calls:
                return False
            counter.count += 1
            return True

    async def reset(self, caller: str | None = None) -> None:
        async with self._lock:
            if caller is None:
                self._counters.clear()
            else:
                self._counters.pop(caller, None)

    def _evict(self, now: float) -> None:
        """Drop expired windows, then the oldest live ones, until one slot is free."""

        while self._counters:
            oldest_key = next(iter(self._counters))
            expired = now - self._counters[oldest_key].window_start >= self.window_seconds
            if not expired and len(self._counters) < self._max_tracked:
                break
            del self._counters[oldest_key]
