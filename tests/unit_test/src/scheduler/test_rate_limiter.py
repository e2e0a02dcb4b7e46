from src.scheduler.rate_limiter import HostRateLimiter


def test_unknown_host_can_be_attempted(clock):
    """A host never attempted is always allowed."""
    limiter = HostRateLimiter(20.0, clock=clock)
    assert limiter.can_attempt("example.com")


def test_blocked_immediately_after_attempt(clock):
    limiter = HostRateLimiter(20.0, clock=clock)
    limiter.record_attempt("example.com")
    assert not limiter.can_attempt("example.com")


def test_allowed_once_interval_elapsed(clock):
    """Eligibility returns exactly at the configured interval."""
    limiter = HostRateLimiter(20.0, clock=clock)
    limiter.record_attempt("example.com")
    clock.advance(19.9)
    assert not limiter.can_attempt("example.com")
    clock.advance(0.1)
    assert limiter.can_attempt("example.com")


def test_hosts_are_independent(clock):
    limiter = HostRateLimiter(20.0, clock=clock)
    limiter.record_attempt("a.com")
    clock.advance(5)
    limiter.record_attempt("b.com")
    clock.advance(15)
    assert limiter.can_attempt("a.com")
    assert not limiter.can_attempt("b.com")
    assert limiter.can_attempt("c.com")


def test_can_attempt_has_no_side_effect(clock):
    limiter = HostRateLimiter(20.0, clock=clock)
    limiter.can_attempt("a.com")
    assert limiter.last_attempt == {}


def test_timestamps_never_decrease(clock):
    limiter = HostRateLimiter(20.0, clock=clock)
    limiter.record_attempt("a.com")
    first = limiter.last_attempt["a.com"]
    clock.advance(-10)
    limiter.record_attempt("a.com")
    assert limiter.last_attempt["a.com"] == first


def test_time_until_allowed(clock):
    limiter = HostRateLimiter(20.0, clock=clock)
    assert limiter.time_until_allowed("a.com") == 0.0
    limiter.record_attempt("a.com")
    clock.advance(5)
    assert limiter.time_until_allowed("a.com") == 15.0
    assert limiter.next_allowed_time("a.com") == clock.now + 15.0
