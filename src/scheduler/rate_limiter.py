"""Per-host rate limiter, ensure minimum time between repeated requests to a server."""

import threading
import time
from collections.abc import Callable


class HostRateLimiter:
    """Track the last fetch attempt per host and gate new attempts."""

    def __init__(self, min_interval: float = 20.0,
                 clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize HostRateLimiter."""
        self.min_interval = min_interval
        self.clock = clock
        self.last_attempt: dict[str, float] = {}
        self.lock = threading.Lock()

    def record_attempt(self, host: str) -> None:
        """Mark host as attempted right now."""
        now = self.clock()
        with self.lock:
            # never move a host's timestamp backwards
            self.last_attempt[host] = max(now, self.last_attempt.get(host, now))

    def can_attempt(self, host: str) -> bool:
        """Fast check w/out updating state."""
        with self.lock:
            last = self.last_attempt.get(host)
        if last is None:
            return True
        return self.clock() - last >= self.min_interval

    def next_allowed_time(self, host: str) -> float:
        """Return the earliest clock value at which host may be attempted."""
        with self.lock:
            last = self.last_attempt.get(host)
        if last is None:
            return self.clock()
        return last + self.min_interval

    def time_until_allowed(self, host: str) -> float:
        """Return seconds until host becomes eligible, 0.0 if it already is."""
        return max(0.0, self.next_allowed_time(host) - self.clock())
