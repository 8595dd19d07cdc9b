"""Shared fixtures: a fresh SQLite store per test and document factories."""

import pytest
from fastapi.testclient import TestClient

from pride_directory_api.app.core.config import settings
from pride_directory_api.app.core.db import get_cursor, init_db, insert_document


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the store at a temporary file and apply migrations."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "directory.db"))
    init_db()
    yield tmp_path / "directory.db"


@pytest.fixture
def add_business():
    """Insert a business document; ``name=None`` leaves ``businessName`` out."""

    def _add(name="Rainbow Bakery", doc_id=None, created_at=None, **fields):
        data = dict(fields)
        if name is not None:
            data["businessName"] = name
        with get_cursor() as cursor:
            return insert_document(cursor, "businesses", data, doc_id=doc_id, created_at=created_at)

    return _add


@pytest.fixture
def add_event():
    def _add(title="Pride Picnic", doc_id=None, **fields):
        data = {"title": title, **fields}
        with get_cursor() as cursor:
            return insert_document(cursor, "events", data, doc_id=doc_id)

    return _add


@pytest.fixture
def client():
    from pride_directory_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client
