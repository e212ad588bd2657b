import pytest
from fastapi.testclient import TestClient

from bookstore.ui.context import ServiceContext
from tests.fakes.backend import create_app


@pytest.fixture
def backend():
    return create_app()


@pytest.fixture
def http(backend):
    with TestClient(backend) as client:
        yield client


@pytest.fixture
def ctx(rules, storage, http, tmp_path) -> ServiceContext:
    """Full service graph wired to the fake backend over HTTP."""
    rules.api.base_url = "http://testserver/api"
    return ServiceContext.create(rules, storage, http=http, upload_dir=str(tmp_path / "uploads"))
