from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import team_availability.models  # noqa: F401
from team_availability.config import settings
from team_availability.db.base import Base
from team_availability.db.session import get_db
from team_availability.main import app

ADMIN_SECRET = "open-sesame"


@pytest.fixture
def engine(tmp_path):
    # File DB so requests served from worker threads each get their own connection
    eng = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def admin_secret(monkeypatch) -> str:
    monkeypatch.setattr(settings, "admin_secret", ADMIN_SECRET)
    return ADMIN_SECRET


@pytest.fixture
def app_with_db(session_factory, admin_secret):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(app_with_db) -> TestClient:
    return TestClient(app_with_db)
