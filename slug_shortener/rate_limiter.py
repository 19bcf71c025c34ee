import asyncio
import logging
import threading
from time import time
from typing import Optional

from slug_shortener.config import Settings
from slug_shortener.exceptions import TooManyRequestsError

logger = logging.getLogger(__name__)


class _SlidingWindow:
    """Per-key request timestamps over a sliding window."""

    def __init__(self, window_seconds: int):
        self.window_seconds = window_seconds
        self._requests: dict[str, list[float]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._global_lock = threading.Lock()
        self._last_prune = 0.0

    def _get_lock(self, key: str) -> asyncio.Lock:
        """Get or create lock for this key."""
        self._prune_idle_keys(time())
        if key not in self._locks:
            with self._global_lock:
                if key not in self._locks:
                    self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def _cleanup_old_entries(self, key: str, current_time: float) -> list[float]:
        """Remove timestamps outside the window and return the rest."""
        cutoff = current_time - self.window_seconds
        timestamps = [t for t in self._requests.get(key, []) if t > cutoff]
        self._requests[key] = timestamps
        return timestamps

    def _prune_idle_keys(self, current_time: float) -> None:
        """
        Forget keys with no request inside the window.

        Runs at most once per window. Keys whose lock is held are in use and
        kept, so the tables stay bounded by the clients seen in the last window.
        """
        if current_time - self._last_prune < self.window_seconds:
            return

        cutoff = current_time - self.window_seconds
        with self._global_lock:
            self._last_prune = current_time
            for key in list(self._locks.keys() | self._requests.keys()):
                lock = self._locks.get(key)
                if lock is not None and lock.locked():
                    continue
                timestamps = self._requests.get(key)
                if not timestamps or timestamps[-1] <= cutoff:
                    self._requests.pop(key, None)
                    self._locks.pop(key, None)

    def tracked_keys(self) -> set[str]:
        """Keys currently holding state."""
        return set(self._requests) | set(self._locks)


class RateLimiter(_SlidingWindow):
    """Thread-safe rate limiter using sliding window algorithm."""

    def __init__(self, max_requests: int = 2, window_seconds: int = 30):
        super().__init__(window_seconds)
        self.max_requests = max_requests

    async def check_rate_limit(self, client_id: str) -> tuple[bool, Optional[int]]:
        """
        Check if a client has exceeded the rate limit.

        Rejected requests are not counted.

        Returns:
            (is_allowed, retry_after_seconds)
        """
        async with self._get_lock(client_id):
            current_time = time()
            timestamps = self._cleanup_old_entries(client_id, current_time)

            if len(timestamps) < self.max_requests:
                timestamps.append(current_time)
                return True, None

            oldest_timestamp = timestamps[0]
            retry_after = int(self.window_seconds - (current_time - oldest_timestamp)) + 1
            return False, retry_after


class SlowDown(_SlidingWindow):
    """
    Adds growing delay once a client passes ``delay_after`` requests in the window.

    The n-th request in a window waits ``(n - delay_after) * delay_ms``,
    capped at ``max_delay_ms``. Every request counts, including ones the
    rate limiter later rejects.
    """

    def __init__(
        self,
        delay_after: int = 2,
        delay_ms: int = 500,
        window_seconds: int = 30,
        max_delay_ms: Optional[int] = None,
    ):
        super().__init__(window_seconds)
        self.delay_after = delay_after
        self.delay_ms = delay_ms
        self.max_delay_ms = max_delay_ms

    async def record_request(self, client_id: str) -> float:
        """Count a request and return the delay to apply, in seconds."""
        async with self._get_lock(client_id):
            current_time = time()
            timestamps = self._cleanup_old_entries(client_id, current_time)
            timestamps.append(current_time)
            excess = len(timestamps) - self.delay_after

        if excess <= 0:
            return 0.0

        delay_ms = excess * self.delay_ms
        if self.max_delay_ms is not None:
            delay_ms = min(delay_ms, self.max_delay_ms)
        return delay_ms / 1000


class CreateThrottle:
    """Slow-down followed by a hard rate limit, applied to mapping creation."""

    def __init__(self, slow_down: SlowDown, rate_limiter: RateLimiter):
        self.slow_down = slow_down
        self.rate_limiter = rate_limiter

    @classmethod
    def from_settings(cls, settings: Settings) -> "CreateThrottle":
        return cls(
            slow_down=SlowDown(
                delay_after=settings.slow_down_delay_after,
                delay_ms=settings.slow_down_delay_ms,
                window_seconds=settings.rate_limit_window_seconds,
                max_delay_ms=settings.slow_down_max_delay_ms,
            ),
            rate_limiter=RateLimiter(
                max_requests=settings.rate_limit_max_requests,
                window_seconds=settings.rate_limit_window_seconds,
            ),
        )

    async def check(self, client_id: str) -> None:
        """
        Delay and/or reject a create request from ``client_id``.

        Raises:
            TooManyRequestsError: over the per-window limit
        """
        delay = await self.slow_down.record_request(client_id)
        if delay > 0:
            logger.debug("Slowing down %s by %.2fs", client_id, delay)
            await asyncio.sleep(delay)

        is_allowed, retry_after = await self.rate_limiter.check_rate_limit(client_id)
        if not is_allowed:
            logger.info("Rate limit exceeded for %s (retry after %ss)", client_id, retry_after)
            raise TooManyRequestsError(retry_after)
