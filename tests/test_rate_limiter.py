import asyncio

import pytest

from slug_shortener.config import Settings
from slug_shortener.exceptions import TooManyRequestsError
from slug_shortener.rate_limiter import CreateThrottle, RateLimiter, SlowDown


def test_rate_limiter_allows_under_limit():
    """Test requests under limit are allowed."""
    limiter = RateLimiter(max_requests=2, window_seconds=30)
    for _ in range(2):
        allowed, retry = asyncio.run(limiter.check_rate_limit("192.168.1.1"))
        assert allowed is True
        assert retry is None


def test_rate_limiter_blocks_over_limit():
    """Test requests over limit are blocked."""
    limiter = RateLimiter(max_requests=2, window_seconds=30)
    for _ in range(2):
        asyncio.run(limiter.check_rate_limit("192.168.1.1"))

    allowed, retry_after = asyncio.run(limiter.check_rate_limit("192.168.1.1"))
    assert allowed is False
    assert 25 <= retry_after <= 31


def test_rate_limiter_resets_after_window():
    """Test counter resets after window expires."""
    limiter = RateLimiter(max_requests=1, window_seconds=1)
    asyncio.run(limiter.check_rate_limit("192.168.1.1"))

    allowed, _ = asyncio.run(limiter.check_rate_limit("192.168.1.1"))
    assert allowed is False

    asyncio.run(asyncio.sleep(1.1))

    allowed, _ = asyncio.run(limiter.check_rate_limit("192.168.1.1"))
    assert allowed is True


def test_different_clients_independent():
    """Test different IPs have independent counters."""
    limiter = RateLimiter(max_requests=1, window_seconds=30)
    asyncio.run(limiter.check_rate_limit("192.168.1.1"))

    allowed, _ = asyncio.run(limiter.check_rate_limit("192.168.1.1"))
    assert allowed is False

    allowed, _ = asyncio.run(limiter.check_rate_limit("192.168.1.2"))
    assert allowed is True


def test_slow_down_grows_after_threshold():
    """Delay is zero up to delay_after, then grows by delay_ms per request."""
    slow_down = SlowDown(delay_after=2, delay_ms=500, window_seconds=30)

    delays = [asyncio.run(slow_down.record_request("10.0.0.1")) for _ in range(4)]
    assert delays == [0.0, 0.0, 0.5, 1.0]


def test_slow_down_is_capped():
    slow_down = SlowDown(delay_after=0, delay_ms=500, window_seconds=30, max_delay_ms=700)

    delays = [asyncio.run(slow_down.record_request("10.0.0.1")) for _ in range(3)]
    assert delays == [0.5, 0.7, 0.7]


def test_throttle_rejects_after_limit():
    throttle = CreateThrottle.from_settings(Settings(
        rate_limit_max_requests=2,
        rate_limit_window_seconds=30,
        slow_down_delay_ms=0,
    ))

    asyncio.run(throttle.check("10.0.0.1"))
    asyncio.run(throttle.check("10.0.0.1"))

    with pytest.raises(TooManyRequestsError) as exc_info:
        asyncio.run(throttle.check("10.0.0.1"))
    assert exc_info.value.status_code == 429
    assert exc_info.value.retry_after > 0


def test_throttle_delays_before_rejecting():
    """The request past the slow-down threshold waits before being judged."""
    throttle = CreateThrottle(
        slow_down=SlowDown(delay_after=1, delay_ms=50, window_seconds=30),
        rate_limiter=RateLimiter(max_requests=1, window_seconds=30),
    )
    asyncio.run(throttle.check("10.0.0.1"))

    async def timed_check():
        loop = asyncio.get_running_loop()
        start = loop.time()
        with pytest.raises(TooManyRequestsError):
            await throttle.check("10.0.0.1")
        return loop.time() - start

    assert asyncio.run(timed_check()) >= 0.04


def test_idle_clients_are_forgotten():
    """State for a client disappears once its window has passed."""
    limiter = RateLimiter(max_requests=5, window_seconds=1)
    for i in range(20):
        asyncio.run(limiter.check_rate_limit(f"10.9.9.{i}"))
    assert len(limiter.tracked_keys()) == 20

    asyncio.run(asyncio.sleep(1.1))

    asyncio.run(limiter.check_rate_limit("192.168.1.1"))
    assert limiter.tracked_keys() == {"192.168.1.1"}


def test_slow_down_forgets_idle_clients():
    slow_down = SlowDown(delay_after=2, delay_ms=500, window_seconds=1)
    asyncio.run(slow_down.record_request("10.0.0.1"))

    asyncio.run(asyncio.sleep(1.1))

    assert asyncio.run(slow_down.record_request("10.0.0.2")) == 0.0
    assert slow_down.tracked_keys() == {"10.0.0.2"}


def test_active_client_survives_pruning():
    limiter = RateLimiter(max_requests=1, window_seconds=1)
    asyncio.run(limiter.check_rate_limit("10.0.0.1"))
    asyncio.run(asyncio.sleep(0.6))
    asyncio.run(limiter.check_rate_limit("10.0.0.2"))
    asyncio.run(asyncio.sleep(0.6))

    # 10.0.0.1 is idle, 10.0.0.2 still has a request inside the window
    allowed, _ = asyncio.run(limiter.check_rate_limit("10.0.0.2"))
    assert allowed is False
    assert "10.0.0.1" not in limiter.tracked_keys()
