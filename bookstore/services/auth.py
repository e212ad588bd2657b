"""
Session management over client-local storage.

The token and a cached copy of the user live under the `token` and `user`
keys. The backend owns issuance; this service only stores, restores and
forgets sessions.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from jose import JWTError, jwt
from pydantic import ValidationError

from bookstore.api.auth import AuthApi
from bookstore.api.client import ApiError
from bookstore.api.users import UsersApi
from bookstore.app_shell.rate_limit import RateLimiter
from bookstore.domain.entities import User
from bookstore.ports.storage import KeyValueStorePort

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class LoginThrottledError(Exception):
    def __init__(self, retry_after: int):
        super().__init__(f"Too many login attempts. Try again in {retry_after} seconds.")
        self.retry_after = retry_after


def token_expired(token: str, now: datetime | None = None) -> bool:
    """
    True when the JWT carries an `exp` claim in the past.

    Claims are read without verifying the signature. A token whose claims
    cannot be read is not considered expired; the backend decides. An
    `exp` that is not a timestamp counts as expired.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        logger.debug("Stored token is not a readable JWT")
        return False
    exp = claims.get("exp")
    if exp is None:
        return False
    now = now or datetime.now(UTC)
    try:
        expires = datetime.fromtimestamp(float(exp), UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.info(f"Stored token has an unreadable exp claim: {exp!r}")
        return True
    return expires <= now


class AuthService:
    def __init__(
        self,
        storage: KeyValueStorePort,
        auth_api: AuthApi,
        users_api: UsersApi,
        rate_limiter: RateLimiter | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.storage = storage
        self.auth_api = auth_api
        self.users_api = users_api
        self.rate_limiter = rate_limiter
        self._clock = clock or (lambda: datetime.now(UTC))
        self._user: User | None = None

    # --- State ---

    @property
    def token(self) -> str | None:
        token = self.storage.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    @property
    def current_user(self) -> User | None:
        if self._user is None and self.token:
            self._user = self._cached_user()
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.current_user is not None

    @property
    def is_admin(self) -> bool:
        user = self.current_user
        return user is not None and user.is_admin

    def _cached_user(self) -> User | None:
        raw = self.storage.get(USER_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            logger.warning("Discarding unreadable cached user")
            self.storage.remove(USER_KEY)
            return None

    def _store(self, token: str, user: User) -> None:
        self.storage.set(TOKEN_KEY, token)
        self.storage.set(USER_KEY, user.model_dump())
        self._user = user

    # --- Operations ---

    def restore(self) -> User | None:
        """
        Re-validate a stored session at start-up by fetching the user fresh.
        Any failure clears the session.
        """
        token = self.token
        if not token:
            self._user = None
            return None

        if token_expired(token, self._clock()):
            logger.info("Stored session token has expired")
            self.clear_session()
            return None

        try:
            user = self.users_api.me()
        except ApiError as e:
            logger.info(f"Session expired or invalid: {e}")
            self.clear_session()
            return None

        self._store(token, user)
        return user

    def login(self, username_or_email: str, password: str) -> User:
        identity = username_or_email.strip()
        if self.rate_limiter and not self.rate_limiter.check_login(identity):
            raise LoginThrottledError(self.rate_limiter.login_retry_after(identity))

        response = self.auth_api.login(identity, password)
        self._store(response.token, response.user)
        if self.rate_limiter:
            self.rate_limiter.clear_login(identity)
        logger.info(f"Signed in as {response.user.email}")
        return response.user

    def register(self, name: str, email: str, password: str) -> str:
        """Create the account without signing in."""
        message = self.auth_api.register(name, email, password)
        logger.info(f"Registered account for {email}")
        return message

    def logout(self) -> None:
        self.clear_session()
        logger.info("Signed out")

    def clear_session(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)
        self._user = None

    def update_user(self, user: User) -> None:
        self.storage.set(USER_KEY, user.model_dump())
        self._user = user
