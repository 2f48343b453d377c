import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from tracker.config import Settings
from tracker.database import build_engine, create_db_and_tables, dispose_engine
from tracker.main import create_app


@pytest.fixture
def settings(monkeypatch, tmp_path):
    """Settings pointing at a fresh SQLite file for each test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'tracker.db'}")
    monkeypatch.setenv("STATIC_DIR", str(tmp_path / "public"))
    monkeypatch.delenv("PASSWORD_SCHEME", raising=False)
    monkeypatch.delenv("LEGACY_ERROR_STATUS", raising=False)
    return Settings()


@pytest.fixture
def client(settings):
    # entering the context runs the lifespan (engine + tables)
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def session(settings):
    engine = build_engine(settings)
    create_db_and_tables(engine)
    with Session(engine) as s:
        yield s
    dispose_engine(engine)


@pytest.fixture
def register(client):
    def _register(name="A", email="a@x.com", password="pw", **extra):
        r = client.post('/api/auth/register', json={'name': name, 'email': email, 'password': password, **extra})
        return r.json()
    return _register
