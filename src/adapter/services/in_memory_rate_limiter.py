import time
from dataclasses import dataclass
from typing import Callable, Dict

from src.app.services.rate_limiter import IRateLimiter


@dataclass
class _Window:
    count: int
    started_at: float


class InMemoryRateLimiter(IRateLimiter):
    """
    Per-process rate limiter.

    Each key keeps an attempt count and the time its window started. When
    more than ``window_seconds`` have elapsed since the window started, the
    next attempt opens a fresh window. Stale keys are only reset when they are
    checked again; nothing is evicted and nothing is shared between processes.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def check_and_increment(self, key: str) -> bool:
        now = self._clock()
        window = self._windows.get(key)

        if window is None or now - window.started_at > self.window_seconds:
            self._windows[key] = _Window(count=1, started_at=now)
            return True

        if window.count >= self.max_requests:
            return False

        window.count += 1
        return True
