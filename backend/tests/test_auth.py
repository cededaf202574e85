"""
Tests for registration, login and bearer-token authentication.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import delete

from fitshare.api.dependencies.auth import verify_token
from fitshare.shared.core.exceptions import AuthenticationError
from fitshare.shared.models import User
from fitshare.shared.repositories import UserRepository

from tests.conftest import auth_headers, token_for


REGISTRATION = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "Ada@Example.com",
    "password": "password123",
    "height": 66,
}


class TestRegisterAndLogin:
    async def test_register_returns_token_and_profile(self, client):
        response = await client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["user"]["email"] == "ada@example.com"
        assert body["data"]["tokenType"] == "bearer"
        assert "passwordHash" not in body["data"]["user"]

        me = await client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {body['data']['token']}"}
        )
        assert me.status_code == 200
        assert me.json()["data"]["firstName"] == "Ada"

    async def test_duplicate_email_conflicts(self, client):
        await client.post("/api/auth/register", json=REGISTRATION)

        response = await client.post(
            "/api/auth/register", json={**REGISTRATION, "email": "ada@example.com"}
        )

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "User already exists with this email",
            "code": "CONFLICT",
        }

    async def test_concurrent_duplicate_hits_unique_constraint_as_conflict(self, client, monkeypatch):
        await client.post("/api/auth/register", json=REGISTRATION)

        # The other request registered between our existence check and insert
        async def email_free(self, email):
            return False

        monkeypatch.setattr(UserRepository, "email_exists", email_free)
        response = await client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 409
        assert response.json()["message"] == "User already exists with this email"

    async def test_short_password_rejected(self, client):
        response = await client.post("/api/auth/register", json={**REGISTRATION, "password": "short"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert any(error.startswith("password:") for error in body["errors"])

    async def test_login(self, client):
        await client.post("/api/auth/register", json=REGISTRATION)

        response = await client.post(
            "/api/auth/login", json={"email": "ada@example.com", "password": "password123"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert response.json()["data"]["expiresIn"] > 0

    @pytest.mark.parametrize(
        "credentials",
        [
            {"email": "ada@example.com", "password": "wrong-password"},
            {"email": "nobody@example.com", "password": "password123"},
        ],
    )
    async def test_bad_credentials_are_indistinguishable(self, client, credentials):
        await client.post("/api/auth/register", json=REGISTRATION)

        response = await client.post("/api/auth/login", json=credentials)

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestBearerTokens:
    async def test_missing_header(self, client):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_garbage_token(self, client):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    async def test_expired_token(self, client, make_user):
        user = await make_user()

        response = await client.get(
            "/api/auth/me",
            headers=auth_headers(
                user,
                issued_at=datetime.now(timezone.utc) - timedelta(hours=2),
                expires_delta=timedelta(hours=1),
            ),
        )

        assert response.status_code == 401

    async def test_token_from_before_startup_is_rejected(self, client, make_user):
        user = await make_user()
        stale = auth_headers(user, issued_at=datetime.now(timezone.utc) - timedelta(minutes=5))

        response = await client.get("/api/auth/me", headers=stale)

        assert response.status_code == 401
        assert response.json()["message"] == "Session expired, please log in again"

    async def test_token_for_deleted_user(self, client, make_user, database):
        user = await make_user()
        headers = auth_headers(user)
        async with database.session() as s:
            await s.execute(delete(User).where(User.id == user.id))

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 404

    async def test_optional_auth_ignores_bad_tokens(self, client, make_user):
        user = await make_user()

        response = await client.get(
            f"/api/users/{user.id}", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["firstName"] == "Ada"


class TestVerifyToken:
    async def test_claims(self, make_user):
        user = await make_user()

        claims = verify_token(token_for(user))

        assert claims == {"user_id": user.id, "email": user.email}

    async def test_started_at_cutoff(self, make_user):
        user = await make_user()
        token = token_for(user, issued_at=datetime(2025, 1, 1, tzinfo=timezone.utc))

        with pytest.raises(AuthenticationError):
            verify_token(token, started_at=int(datetime(2025, 1, 2, tzinfo=timezone.utc).timestamp()))
