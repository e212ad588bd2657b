from datetime import UTC, datetime, timedelta

import pytest

from bookstore.app_shell.rate_limit import RateLimiter
from bookstore.rules.models import RateLimitRules, RateLimitWindow


class FakeTime:
    def __init__(self):
        self.current = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def rules():
    return RateLimitRules(
        login=RateLimitWindow(window_seconds=60, max_attempts=3),
        upload=RateLimitWindow(window_seconds=60, max_requests=2)
    )

@pytest.fixture
def clock():
    return FakeTime()

@pytest.fixture
def limiter(rules, clock):
    return RateLimiter(rules, clock)

def test_allow_request_basic(limiter):
    key = "test_key"
    assert limiter.allow_request(key, 60, 2) is True
    assert limiter.allow_request(key, 60, 2) is True
    assert limiter.allow_request(key, 60, 2) is False  # Limit reached

def test_window_slides(limiter, clock):
    assert limiter.allow_request("k", 60, 1) is True
    assert limiter.allow_request("k", 60, 1) is False

    clock.advance(61)

    assert limiter.allow_request("k", 60, 1) is True

def test_zero_limit_blocks(limiter):
    assert limiter.allow_request("k", 60, 0) is False

def test_login_bucket_is_case_insensitive(limiter):
    assert limiter.check_login("Alice")
    assert limiter.check_login("alice")
    assert limiter.check_login("ALICE")
    assert not limiter.check_login("alice")
    # Other identities are unaffected
    assert limiter.check_login("bob")

def test_retry_after(limiter, clock):
    for _ in range(3):
        limiter.check_login("alice")
    clock.advance(20)

    assert limiter.login_retry_after("alice") == 41
    assert limiter.login_retry_after("nobody") == 0

def test_clear_login(limiter):
    for _ in range(3):
        limiter.check_login("alice")
    limiter.clear_login("alice")
    assert limiter.check_login("alice")

def test_upload_bucket_per_user(limiter):
    assert limiter.check_upload("1")
    assert limiter.check_upload("1")
    assert not limiter.check_upload("1")
    assert limiter.check_upload("2")

def test_missing_limits_use_defaults(clock):
    rules = RateLimitRules(
        login=RateLimitWindow(window_seconds=60),
        upload=RateLimitWindow(window_seconds=60),
    )
    limiter = RateLimiter(rules, clock)
    assert sum(limiter.check_login("a") for _ in range(10)) == 5
    assert sum(limiter.check_upload("a") for _ in range(40)) == 30
