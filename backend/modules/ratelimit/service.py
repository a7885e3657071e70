"""
Fixed-window rate limiter.

Keeps the timestamps of admitted requests per client key and admits a new
request only while fewer than max_requests fall inside the window. State is
per process; instances behind a load balancer count independently.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from shared.config import Settings


@dataclass(frozen=True)
class RateLimitPolicy:
    """Ceiling and window for one limiter."""

    max_requests: int
    window_seconds: float

    @classmethod
    def auth(cls, settings: Optional[Settings] = None) -> "RateLimitPolicy":
        """Authentication endpoints: 5 requests / 15 minutes by default."""
        if settings is None:
            return cls(max_requests=5, window_seconds=15 * 60)
        return cls(settings.auth_rate_limit_requests, settings.auth_rate_limit_window)

    @classmethod
    def api(cls, settings: Optional[Settings] = None) -> "RateLimitPolicy":
        """General API: 100 requests / 15 minutes by default."""
        if settings is None:
            return cls(max_requests=100, window_seconds=15 * 60)
        return cls(settings.api_rate_limit_requests, settings.api_rate_limit_window)


class FixedWindowRateLimiter:
    """
    Thread-safe per-key request counter.

    One lock guards the whole map so prune, count and append happen as a
    single step; two concurrent requests can never both take the last slot.
    """

    def __init__(self, policy: RateLimitPolicy, clock: Optional[Callable[[], float]] = None):
        self._policy = policy
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        self._requests: dict[str, list[float]] = {}

    @property
    def policy(self) -> RateLimitPolicy:
        return self._policy

    def check(self, client_key: str) -> bool:
        """Record and admit the request, or deny it without recording."""
        now = self._clock()
        window = self._policy.window_seconds
        with self._lock:
            timestamps = [t for t in self._requests.get(client_key, []) if now - t < window]
            if len(timestamps) >= self._policy.max_requests:
                self._requests[client_key] = timestamps
                return False
            timestamps.append(now)
            self._requests[client_key] = timestamps
            return True

    def reset(self, client_key: Optional[str] = None) -> None:
        """Forget one client's history, or everyone's."""
        with self._lock:
            if client_key is None:
                self._requests.clear()
            else:
                self._requests.pop(client_key, None)
