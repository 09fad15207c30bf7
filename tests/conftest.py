"""Shared pytest fixtures for the expense server."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


SERVER_DIR = Path(__file__).resolve().parents[1] / "server"
if str(SERVER_DIR) not in sys.path:
    sys.path.insert(0, str(SERVER_DIR))

from core.config import Settings  # noqa: E402
from core.state import SessionManager  # noqa: E402
from main import create_app  # noqa: E402


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        app_env="development",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        session_secret="test-secret",
        bcrypt_rounds=4,
        log_level="DEBUG",
    )


@pytest.fixture
def app(settings: Settings, clock: FakeClock):
    app = create_app(settings)
    app.state.sessions = SessionManager(
        settings.session_secret,
        lifetime=settings.session_lifetime,
        clock=clock,
    )
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def register_and_login(client: TestClient, username: str, password: str) -> None:
    response = client.post(
        "/register",
        json={"username": username, "password": password},
        follow_redirects=False,
    )
    assert response.status_code == 302
    response = client.post(
        "/login",
        json={"username": username, "password": password},
        follow_redirects=False,
    )
    assert response.status_code == 302
