"""Integration tests for Auth API endpoints"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
class TestAuthAPIIntegration:
    """Integration test suite for /auth endpoints"""

    async def test_register_login_and_me(self, client: AsyncClient, api_prefix):
        """
        Given a new account registered with a mixed-case email
        When logging in with the lower-cased email and calling /me
        Then the same profile is returned
        """
        # Arrange
        register = await client.post(
            f"{api_prefix}/auth/register",
            json={
                "email": "Jane@Example.com",
                "password": "s3cret-pass",
                "full_name": "Jane Doe",
                "company_name": "Jane Design",
            },
        )
        assert register.status_code == 201
        registered = register.json()
        assert registered["token_type"] == "bearer"
        assert registered["user"]["email"] == "jane@example.com"
        assert "password_hash" not in registered["user"]

        # Act
        login = await client.post(
            f"{api_prefix}/auth/login",
            json={"email": "jane@example.com", "password": "s3cret-pass"},
        )
        token = login.json()["access_token"]
        me = await client.get(f"{api_prefix}/auth/me", headers={"Authorization": f"Bearer {token}"})

        # Assert
        assert login.status_code == 200
        assert me.status_code == 200
        assert me.json()["id"] == registered["user"]["id"]
        assert me.json()["company_name"] == "Jane Design"

    async def test_register_duplicate_email(self, client: AsyncClient, api_prefix, register_user):
        await register_user("dup@example.com")

        response = await client.post(
            f"{api_prefix}/auth/register",
            json={"email": "DUP@example.com", "password": "another-pass"},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "USER_ALREADY_EXISTS"

    async def test_register_short_password_is_rejected_by_schema(self, client: AsyncClient, api_prefix):
        response = await client.post(
            f"{api_prefix}/auth/register",
            json={"email": "short@example.com", "password": "123"},
        )

        assert response.status_code == 422

    async def test_login_wrong_password(self, client: AsyncClient, api_prefix, register_user):
        await register_user("wrong@example.com")

        response = await client.post(
            f"{api_prefix}/auth/login",
            json={"email": "wrong@example.com", "password": "not-the-password"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    async def test_login_unknown_email_gives_same_error(self, client: AsyncClient, api_prefix):
        response = await client.post(
            f"{api_prefix}/auth/login",
            json={"email": "nobody@example.com", "password": "whatever"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    async def test_me_without_token(self, client: AsyncClient, api_prefix):
        response = await client.get(f"{api_prefix}/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "MISSING_TOKEN"

    async def test_me_with_garbage_token(self, client: AsyncClient, api_prefix):
        response = await client.get(
            f"{api_prefix}/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"

    async def test_health(self, client: AsyncClient, api_prefix):
        root = await client.get("/health")
        prefixed = await client.get(f"{api_prefix}/health")

        assert root.status_code == 200
        assert root.json()["status"] == "ok"
        assert prefixed.status_code == 200
