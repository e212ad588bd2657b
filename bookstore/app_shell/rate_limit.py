"""
Client-side sliding-window throttling.

The backend enforces its own limits; this keeps a single desktop or browser
session from hammering the login and upload endpoints.
"""

from datetime import UTC, datetime, timedelta
from threading import Lock
from typing import Protocol

from bookstore.rules.models import RateLimitRules

DEFAULT_LOGIN_ATTEMPTS = 5
DEFAULT_UPLOAD_REQUESTS = 30


class TimePort(Protocol):
    def now(self) -> datetime:
        ...


class SystemTimeAdapter:
    def now(self) -> datetime:
        return datetime.now(UTC)


class RateLimiter:
    def __init__(self, rules: RateLimitRules, time_port: TimePort | None = None):
        self.rules = rules
        self._time = time_port if time_port is not None else SystemTimeAdapter()
        self._history: dict[str, list[datetime]] = {}
        self._lock = Lock()

    def _prune(self, key: str, window: int) -> list[datetime]:
        cutoff = self._time.now() - timedelta(seconds=window)
        recent = [t for t in self._history.get(key, []) if t > cutoff]
        if recent:
            self._history[key] = recent
        else:
            self._history.pop(key, None)
        return recent

    def allow_request(self, key: str, window: int, limit: int) -> bool:
        """Record an attempt under `key` and return False once `limit` is reached."""
        if limit <= 0:
            return False

        with self._lock:
            recent = self._prune(key, window)
            if len(recent) >= limit:
                return False
            self._history.setdefault(key, []).append(self._time.now())
            return True

    def retry_after(self, key: str, window: int) -> int:
        """Seconds until the oldest attempt in the window expires (0 when clear)."""
        with self._lock:
            recent = self._prune(key, window)
            if not recent:
                return 0
            expires = recent[0] + timedelta(seconds=window)
            return max(0, int((expires - self._time.now()).total_seconds()) + 1)

    def reset(self, key: str) -> None:
        with self._lock:
            self._history.pop(key, None)

    # --- Named buckets ---

    def check_login(self, identity: str) -> bool:
        cfg = self.rules.login
        limit = cfg.max_attempts if cfg.max_attempts is not None else DEFAULT_LOGIN_ATTEMPTS
        return self.allow_request(f"login:{identity.lower()}", cfg.window_seconds, limit)

    def login_retry_after(self, identity: str) -> int:
        return self.retry_after(f"login:{identity.lower()}", self.rules.login.window_seconds)

    def clear_login(self, identity: str) -> None:
        """Forget failed attempts after a successful sign-in."""
        self.reset(f"login:{identity.lower()}")

    def check_upload(self, user_id: str) -> bool:
        cfg = self.rules.upload
        limit = cfg.max_requests if cfg.max_requests is not None else DEFAULT_UPLOAD_REQUESTS
        return self.allow_request(f"upload:{user_id}", cfg.window_seconds, limit)
