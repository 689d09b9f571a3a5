"""
Pytest fixtures shared by the API and service tests.
"""

import pytest
from fastapi.testclient import TestClient

from fakes import FakeStore


@pytest.fixture(autouse=True)
def _env(monkeypatch, tmp_path):
    monkeypatch.setenv("JWT_SECRET", "test-secret-0123456789abcdef0123456789")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.delenv("DEFAULT_PAGE_SIZE", raising=False)
    monkeypatch.delenv("MAX_PAGE_SIZE", raising=False)


@pytest.fixture
def store(monkeypatch):
    """In-memory persistence installed in place of every repository."""
    return FakeStore().install(monkeypatch)


@pytest.fixture
def author(store):
    return store.add_user("user-author", "author@example.com", "author")


@pytest.fixture
def editor(store):
    return store.add_user("user-editor", "editor@example.com", "editor")


@pytest.fixture
def viewer(store):
    return store.add_user("user-viewer", "viewer@example.com", "viewer")


@pytest.fixture
def admin(store):
    return store.add_user("user-admin", "admin@example.com", "admin")


@pytest.fixture
def client(store):
    """Test client without the lifespan, so no database pool is opened."""
    from main import app

    return TestClient(app)
