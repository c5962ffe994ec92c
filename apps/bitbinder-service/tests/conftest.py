import os

# Force the in-memory sqlite engine before the app modules are imported
os.environ.setdefault("PYTEST_RUNNING", "1")

import pytest
from fastapi.testclient import TestClient

from bitbinder.db import models
from bitbinder.db.database import SessionLocal, engine
from bitbinder.api.main import app
from bitbinder.services import (
    reset_assistant_service_for_tests,
    reset_recording_sessions_for_tests,
    reset_recording_storage_for_tests,
)
from bitbinder.utils.feature_flags import refresh_feature_flag_cache


@pytest.fixture(autouse=True)
def _clean_schema():
    """Fresh tables for every test."""
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def _isolated_services(monkeypatch, tmp_path):
    monkeypatch.setenv("RECORDINGS_DIR", str(tmp_path / "recordings"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("LLM_FEATURES_ENABLED", raising=False)
    monkeypatch.delenv("FEATURE_CHAT_ENABLED", raising=False)
    monkeypatch.delenv("SESSION_TTL_HOURS", raising=False)
    refresh_feature_flag_cache()
    reset_assistant_service_for_tests()
    reset_recording_storage_for_tests()
    reset_recording_sessions_for_tests()
    yield
    refresh_feature_flag_cache()
    reset_assistant_service_for_tests()
    reset_recording_storage_for_tests()
    reset_recording_sessions_for_tests()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    """Factory: register + log in a user and return bearer headers."""

    def _make(username: str = "alice", password: str = "secret"):
        r = client.post("/auth/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        r = client.post("/auth/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _make


@pytest.fixture
def user(db_session):
    """A user row for repository-level tests."""
    from bitbinder.db.repositories import users as user_repo

    return user_repo.create_user(db_session, username="repo_user", password="secret")
