from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from bookstore.adapters.local_storage import JsonFileStorage
from bookstore.api.client import ApiClient
from bookstore.rules.loader import load_rules
from bookstore.rules.models import Rules

ROOT = Path(__file__).resolve().parent.parent

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def rules() -> Rules:
    """The real rules.yaml shipped at the project root."""
    return load_rules(ROOT / "rules.yaml")


@pytest.fixture
def storage(tmp_path) -> JsonFileStorage:
    return JsonFileStorage(tmp_path / "local_storage.json")


@pytest.fixture
def make_client():
    """ApiClient whose HTTP layer is an httpx.MockTransport around `handler`."""
    clients: list[ApiClient] = []

    def factory(handler: Handler, token: str | None = None) -> ApiClient:
        client = ApiClient(
            "http://api.test/api",
            token_provider=lambda: token,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield factory
    for c in clients:
        c.close()

