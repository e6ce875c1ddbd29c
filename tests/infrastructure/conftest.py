"""Shared fixtures for store, API and CLI tests (JSON store in a temp dir)."""

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.api.app import create_app
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_store import JsonDocumentStore
from tests.infrastructure.helpers import SECRET, seed


@pytest.fixture
def json_store(tmp_path) -> JsonDocumentStore:
    store = JsonDocumentStore(tmp_path / "storefront.json")
    seed(store)
    return store


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="development",
        store_backend="json",
        data_path=tmp_path / "storefront.json",
        jwt_secret=SECRET,
        log_level="WARNING",
    )


@pytest.fixture
def api_client(settings, json_store) -> TestClient:
    app = create_app(settings, unit_of_work=json_store.unit_of_work)
    return TestClient(app, raise_server_exceptions=False)
