"""
HTTP client for the bookstore REST backend.

All resource APIs go through ApiClient so that authentication headers and
error translation happen in one place:
- a stored token is sent as `Authorization: Bearer <token>`
- HTTP errors become ApiError subclasses carrying the backend's `message`
- a 401 additionally notifies `on_unauthorized` (the session has expired)
- transport failures become NetworkError
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api"
SERVER_ERROR_MESSAGE = "The server reported an error."
NETWORK_ERROR_MESSAGE = "Cannot reach the server. Please check your connection."


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class NetworkError(ApiError):
    pass


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop parameters whose value is None or an empty string."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != ""}


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        token_provider: Callable[[], str | None] | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        timeout: float = 10.0,
        http: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.on_unauthorized = on_unauthorized
        self.http = http or httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self.http.close()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @property
    def origin(self) -> str:
        """Base URL without the trailing /api segment (static files live there)."""
        if self.base_url.endswith("/api"):
            return self.base_url[: -len("/api")]
        return self.base_url

    def _auth_headers(self) -> dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: Any = None,
    ) -> Any:
        try:
            response = self.http.request(
                method,
                self.url(path),
                params=clean_params(params),
                json=json,
                files=files,
                headers=self._auth_headers(),
            )
        except httpx.TransportError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise NetworkError(NETWORK_ERROR_MESSAGE) from e

        if response.is_error:
            raise self._error_for(method, path, response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _error_for(self, method: str, path: str, response: httpx.Response) -> ApiError:
        payload: Any = None
        message = SERVER_ERROR_MESSAGE
        try:
            payload = response.json()
        except ValueError:
            payload = response.text or None

        if isinstance(payload, dict) and payload.get("message"):
            message = str(payload["message"])

        logger.warning(f"{method} {path} -> {response.status_code}: {message}")

        if response.status_code == 401 and self.on_unauthorized:
            self.on_unauthorized()

        error_cls = _STATUS_ERRORS.get(response.status_code, ApiError)
        return error_cls(message, status_code=response.status_code, payload=payload)

    # --- Verbs ---

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, *, params: Mapping[str, Any] | None = None,
             files: Any = None) -> Any:
        return self.request("POST", path, params=params, json=json, files=files)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None, *,
              params: Mapping[str, Any] | None = None) -> Any:
        return self.request("PATCH", path, params=params, json=json)

    def delete(self, path: str, json: Any = None) -> Any:
        return self.request("DELETE", path, json=json)
