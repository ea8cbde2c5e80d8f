import time
from collections import deque
from threading import Lock
from typing import Any, Deque, Dict

# Todoist REST: 450 requests per user per 15 minutes.
DEFAULT_MAX_REQUESTS = 450
DEFAULT_WINDOW_SECONDS = 15 * 60


class RateLimiter:
    """Thread-safe sliding-window limiter that also honours ``Retry-After``."""

    def __init__(self, max_requests: int = DEFAULT_MAX_REQUESTS, window_seconds: float = DEFAULT_WINDOW_SECONDS) -> None:
        self._lock = Lock()
        self._sent: Deque[float] = deque()
        self._next_ts = 0.0
        self.max_requests = max(1, int(max_requests))
        self.window_seconds = float(window_seconds)

    def _wait_time(self, now: float) -> float:
        while self._sent and now - self._sent[0] >= self.window_seconds:
            self._sent.popleft()
        wait = self._next_ts - now
        if len(self._sent) >= self.max_requests:
            wait = max(wait, self._sent[0] + self.window_seconds - now)
        return wait

    def acquire(self) -> None:
        while True:
            with self._lock:
                now = time.time()
                wait = self._wait_time(now)
                if wait <= 0:
                    self._sent.append(now)
                    return
            time.sleep(min(wait, 2.0))

    def update(self, headers: Dict[str, Any]) -> None:
        retry_after = headers.get("Retry-After") or headers.get("retry-after")
        if not retry_after:
            return
        try:
            delay = float(retry_after)
        except (TypeError, ValueError):
            return
        with self._lock:
            self._next_ts = max(self._next_ts, time.time() + delay)


__all__ = ["RateLimiter", "DEFAULT_MAX_REQUESTS", "DEFAULT_WINDOW_SECONDS"]
