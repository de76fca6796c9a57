"""
Tests for the users API endpoints.

Exercises registration, login, profiles and the authentication gate
through the full application on an in-memory store.
"""

from datetime import timedelta

import pytest

from conftest import TEST_SECRET, bearer
from todo_api.infrastructure.todo.token_service import JwtTokenService


class TestRegister:
    """Tests for POST /api/users/register."""

    def test_register_returns_user_and_token(self, client) -> None:
        response = client.post(
            "/api/users/register",
            json={"username": "alice", "email": "Alice@Example.com", "password": "secret123"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["user"]["username"] == "alice"
        assert body["user"]["email"] == "alice@example.com"
        assert body["user"]["id"]
        assert body["token"]
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]

    def test_token_identifies_the_new_user(self, client, alice) -> None:
        claims = JwtTokenService(TEST_SECRET).verify(alice["token"])
        assert claims.user_id == alice["user"]["id"]

    def test_duplicate_email_rejected(self, client, alice) -> None:
        response = client.post(
            "/api/users/register",
            json={"username": "other", "email": "alice@example.com", "password": "secret123"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "email already in use"

    def test_duplicate_username_rejected(self, client, alice) -> None:
        response = client.post(
            "/api/users/register",
            json={"username": "alice", "email": "other@example.com", "password": "secret123"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "username already in use"

    def test_every_violation_reported(self, client) -> None:
        response = client.post(
            "/api/users/register",
            json={"username": "al", "email": "not-an-email", "password": "123"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        fields = {e["field"] for e in body["errors"]}
        assert fields == {"username", "email", "password"}
        assert body["message"].startswith("Validation errors detected")
        email_error = next(e for e in body["errors"] if e["field"] == "email")
        assert email_error["message"] == "Please provide a valid email"
        assert email_error["value"] == "not-an-email"

    @pytest.mark.parametrize("email", ["é@example.com", "josé@example.com", "alice@exämple.com"])
    def test_non_ascii_email_rejected(self, client, email) -> None:
        response = client.post(
            "/api/users/register",
            json={"username": "alice", "email": email, "password": "secret123"},
        )
        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["email"]

    def test_missing_fields_rejected(self, client) -> None:
        response = client.post("/api/users/register", json={})
        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"username", "email", "password"}

    def test_username_is_trimmed(self, client) -> None:
        response = client.post(
            "/api/users/register",
            json={"username": "  bobby  ", "email": "bob@example.com", "password": "secret123"},
        )
        assert response.status_code == 201
        assert response.json()["user"]["username"] == "bobby"


class TestLogin:
    """Tests for POST /api/users/login."""

    def test_login_success(self, client, alice) -> None:
        response = client.post(
            "/api/users/login",
            json={"email": "ALICE@example.com", "password": "secret123"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == alice["user"]["id"]
        assert body["token"]

    def test_wrong_password_and_unknown_email_look_alike(self, client, alice) -> None:
        wrong_password = client.post(
            "/api/users/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )
        unknown_email = client.post(
            "/api/users/login",
            json={"email": "nobody@example.com", "password": "secret123"},
        )
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json()["message"] == unknown_email.json()["message"]
        assert wrong_password.json()["message"] == "Invalid email or password"

    def test_missing_password_rejected(self, client) -> None:
        response = client.post("/api/users/login", json={"email": "alice@example.com"})
        assert response.status_code == 400


class TestProfile:
    """Tests for GET /api/users/profile."""

    def test_profile(self, client, alice, auth_headers) -> None:
        response = client.get("/api/users/profile", headers=auth_headers)
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == alice["user"]["id"]
        assert user["email"] == "alice@example.com"
        assert "createdAt" in user
        assert "updatedAt" in user
        assert "passwordHash" not in user


class TestListUsers:
    """Tests for GET /api/users."""

    def test_lists_newest_first(self, client, alice, auth_headers, register_user) -> None:
        bob = register_user(username="bobby", email="bob@example.com")
        response = client.get("/api/users", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [u["id"] for u in body["users"]] == [bob["user"]["id"], alice["user"]["id"]]
        assert all("passwordHash" not in u for u in body["users"])


class TestAuthenticationGate:
    """Each token failure has its own message."""

    def test_missing_token(self, client) -> None:
        response = client.get("/api/users/profile")
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, no token"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_other_scheme_counts_as_missing(self, client, alice) -> None:
        response = client.get(
            "/api/users/profile", headers={"Authorization": f"Token {alice['token']}"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, no token"

    def test_invalid_token(self, client) -> None:
        response = client.get("/api/users/profile", headers=bearer("garbage"))
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, invalid token"

    def test_token_signed_with_another_secret(self, client, alice) -> None:
        token = JwtTokenService("another-secret").issue(alice["user"]["id"])
        response = client.get("/api/users/profile", headers=bearer(token))
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, invalid token"

    def test_expired_token(self, client, alice) -> None:
        token = JwtTokenService(TEST_SECRET, expires_in=timedelta(seconds=-10)).issue(
            alice["user"]["id"]
        )
        response = client.get("/api/users/profile", headers=bearer(token))
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token expired"

    def test_token_for_unknown_user(self, client) -> None:
        token = JwtTokenService(TEST_SECRET).issue("0" * 32)
        response = client.get("/api/users/profile", headers=bearer(token))
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, user no longer exists"

    def test_token_with_malformed_subject(self, client) -> None:
        token = JwtTokenService(TEST_SECRET).issue("not-an-id")
        response = client.get("/api/users/profile", headers=bearer(token))
        assert response.status_code == 401
