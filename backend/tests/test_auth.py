"""Tests for the shared-password staff login."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from taquero.auth.jwt import create_access_token, decode_token


@pytest.mark.auth
@pytest.mark.asyncio
class TestAuthEndpoints:
    """Login, token and identity endpoints."""

    async def test_staff_names_public(self, client: AsyncClient):
        response = await client.get("/api/auth/staff-names")
        assert response.status_code == 200
        assert "Martin" in response.json()["names"]

    async def test_login_success(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login", json={"name": "Andres", "password": "123456"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["staff_name"] == "Andres"
        assert data["token_type"] == "bearer"
        assert decode_token(data["access_token"])["sub"] == "Andres"

    async def test_login_wrong_password(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login", json={"name": "Andres", "password": "000000"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"

    async def test_login_unknown_name(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login", json={"name": "Mallory", "password": "123456"}
        )
        assert response.status_code == 401

    async def test_token_form(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/token", data={"username": "Hugo", "password": "123456"}
        )
        assert response.status_code == 200
        assert response.json()["staff_name"] == "Hugo"

    async def test_me(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/auth/me", headers=auth_headers)
        assert response.json() == {"name": "Martin"}

    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401

    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    async def test_expired_token(self, client: AsyncClient):
        token = create_access_token("Martin", expires_delta=timedelta(minutes=-5))
        response = await client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    async def test_removed_staff_member(self, client: AsyncClient):
        token = create_access_token("Former Cook")
        response = await client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert "no longer active" in response.json()["error"]["message"]
