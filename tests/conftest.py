import pytest
from fastapi.testclient import TestClient

from users_service.api.main import create_app
from users_service.db.store import UserStore

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture
def store():
    """A fresh in-memory store per test (each engine owns its own database)."""
    s = UserStore.connect(TEST_DATABASE_URL)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
