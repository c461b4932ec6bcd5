from gatekeeper.services.security.rate_limiter import SlidingWindowRateLimiter
from gatekeeper.services.security.checks.spam_check import uniqueness_ratio, uppercase_ratio
from tests.helpers import FakeClock


def test_rejected_attempt_does_not_take_a_slot():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=10, clock=clock)
    assert limiter.hit("a").allowed
    assert limiter.hit("a").allowed
    for _ in range(5):
        assert not limiter.hit("a").allowed
    assert limiter.count("a") == 2


def test_retry_after_is_rounded_up():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10, clock=clock)
    limiter.hit("a")
    clock.advance(2.5)
    result = limiter.hit("a")
    assert not result.allowed
    assert result.retry_after == 8


def test_boundary_timestamp_leaves_window():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10, clock=clock)
    limiter.hit("a")
    clock.advance(10)
    assert limiter.hit("a").allowed


def test_sweep_removes_empty_windows():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60, clock=clock)
    limiter.hit("a")
    clock.advance(30)
    limiter.hit("b")
    clock.advance(31)

    assert limiter.sweep() == 1
    assert len(limiter) == 1
    assert limiter.count("b") == 1

    limiter.reset()
    assert len(limiter) == 0


def test_spam_ratios():
    assert uppercase_ratio("") == 0.0
    assert uppercase_ratio("AB cd") == 0.4
    assert uppercase_ratio("ПРИВЕТ") == 0.0
    assert uniqueness_ratio("a a a b") == 0.5
    assert uniqueness_ratio("") == 1.0
