# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from taskboard.main import app, get_store, settings

from .fakes import InMemoryTaskStore


@pytest.fixture()
def store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def api(store: InMemoryTaskStore):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def prefix() -> str:
    return settings.api_prefix
