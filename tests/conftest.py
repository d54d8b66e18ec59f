"""Shared pytest fixtures: a fresh app with empty in-memory stores per test."""

import logging
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from livenotes.config import Settings
from livenotes.main import create_app
from livenotes.security.password import pwd_context

# Silence chatty third-party loggers to keep test output readable
logging.getLogger("passlib").setLevel(logging.ERROR)


@pytest.fixture(scope="session", autouse=True)
def fast_password_hashing():
    """Use the minimum bcrypt cost so registrations don't dominate test time."""
    pwd_context.update(bcrypt_sha256__rounds=4)
    yield


@pytest.fixture
def test_settings():
    """Settings for testing with a non-default signing key."""
    return Settings(
        secret_key="test-secret-key",
        debug=True,
        log_dir=None,
        heartbeat_interval_seconds=30.0,
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI app with its own empty state."""
    return create_app(test_settings)


@pytest.fixture
def app_state(test_app):
    return test_app.state.livenotes


@pytest.fixture
def client(test_app):
    """Create test client (entered, so HTTP and websockets share one loop)."""
    with TestClient(test_app) as c:
        yield c


@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {
        "username": f"testuser_{uuid4().hex[:8]}",
        "password": "TestPassword123!",
    }


class ApiHelper:
    """Small wrapper for the auth calls most tests need."""

    def __init__(self, client: TestClient):
        self.client = client

    def register(self, username: str, password: str) -> dict:
        resp = self.client.post(
            "/api/auth/register", json={"username": username, "password": password}
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    def login(self, username: str, password: str) -> dict:
        resp = self.client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    def token_for(self, username: str, password: str) -> str:
        self.register(username, password)
        return self.login(username, password)["token"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api(client):
    return ApiHelper(client)


@pytest.fixture
def test_user(api, test_user_data):
    """Register a user through the API and return it with its token."""
    user = api.register(test_user_data["username"], test_user_data["password"])
    token = api.login(test_user_data["username"], test_user_data["password"])["token"]
    return {**user, "password": test_user_data["password"], "token": token}


@pytest.fixture
def auth_headers(test_user):
    """Authentication headers with a valid token."""
    return ApiHelper.bearer(test_user["token"])
