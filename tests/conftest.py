"""
Shared fixtures for the todo API tests.

Every test gets its own application bound to a fresh in-memory SQLite
database, so tests never share users or tasks.
"""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from todo_api.core.config import Settings
from todo_api.infrastructure.todo.database import build_engine, create_schema
from todo_api.main import create_app

TEST_SECRET = "test-secret-key"


def make_settings(**overrides) -> Settings:
    values = dict(
        environment="production",
        database_url="sqlite://",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def engine():
    """A bare in-memory store with the schema created."""
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()


def _register(
    client: TestClient,
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = "secret123",
) -> dict:
    response = client.post(
        "/api/users/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client) -> dict:
    """Registered user: {"user": {...}, "token": ...}."""
    return _register(client)


@pytest.fixture
def auth_headers(alice) -> dict:
    return bearer(alice["token"])


def _create_task(
    client: TestClient, headers: dict, assigned_to: Optional[str] = None, **fields
) -> dict:
    body = {"title": "Test Task", **fields}
    if assigned_to is not None:
        body["assignedTo"] = assigned_to
    response = client.post("/api/tasks", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["task"]


@pytest.fixture
def register_user(client):
    """Factory registering a user through the API."""

    def factory(**kwargs) -> dict:
        return _register(client, **kwargs)

    return factory


@pytest.fixture
def make_task(client, auth_headers):
    """Factory creating a task as the default user."""

    def factory(assigned_to: Optional[str] = None, **fields) -> dict:
        return _create_task(client, auth_headers, assigned_to=assigned_to, **fields)

    return factory
