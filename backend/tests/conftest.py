import sys
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parents[1]
PROJECT_ROOT = ROOT_DIR.parent
for path in (PROJECT_ROOT, ROOT_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from app import app as gateway_app
from services.analytics.app import app as analytics_app
from services.comments.app import app as comments_app
from services.deck.app import app as deck_app
from services.persistence import JSONFileStore, get_store, set_store
from services.share_links.app import app as share_links_app
from shared.utils import config as service_config

SERVICE_APPS = [gateway_app, deck_app, share_links_app, comments_app, analytics_app]


@pytest.fixture
def store(tmp_path: Path) -> JSONFileStore:
    """Fresh JSON file store per test."""
    return JSONFileStore(tmp_path / "data")


@pytest.fixture(autouse=True)
def test_environment(tmp_path: Path, store: JSONFileStore) -> Generator:
    """Point configuration and the store dependency at per-test paths."""
    export_dir = tmp_path / "exports"
    preferences_path = tmp_path / "preferences.json"

    service_config.set("analytics_export_dir", str(export_dir))
    service_config.set("preferences_path", str(preferences_path))
    set_store(store)

    for service_app in SERVICE_APPS:
        service_app.dependency_overrides[get_store] = lambda: store

    try:
        yield
    finally:
        for service_app in SERVICE_APPS:
            service_app.dependency_overrides.pop(get_store, None)
        set_store(None)


@pytest.fixture
def client() -> TestClient:
    """Test client for the unified API (routes under /api)."""
    return TestClient(gateway_app)
