# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from httpx import AsyncClient

from gamebackend.config import get_settings
from tests.conftest import PASSWORD, register


class TestRegister:
    async def test_register_grants_initial_balance(self, client: AsyncClient) -> None:
        user = await register(client, "alice")

        assert user["username"] == "alice"
        assert user["balance"] == get_settings().initial_balance

    async def test_duplicate_username(self, client: AsyncClient) -> None:
        await register(client, "alice")

        response = await client.post(
            "/v1/auth/register",
            json={"username": "alice", "email": "other@example.com", "password": PASSWORD},
        )

        assert response.status_code == 409

    async def test_invalid_payload(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/auth/register",
            json={"username": "a", "email": "not-an-email", "password": "short"},
        )

        assert response.status_code == 422


class TestLogin:
    async def test_login_returns_token(self, client: AsyncClient) -> None:
        await register(client, "alice")

        response = await client.post(
            "/v1/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
        )

        assert response.status_code == 200
        token = response.json()["access_token"]
        me = await client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["username"] == "alice"

    async def test_wrong_password(self, client: AsyncClient) -> None:
        await register(client, "alice")

        response = await client.post(
            "/v1/auth/login", json={"email": "alice@example.com", "password": "wrong-password"}
        )

        assert response.status_code == 401

    async def test_unknown_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/auth/login", json={"email": "nobody@example.com", "password": PASSWORD}
        )

        assert response.status_code == 401


class TestProtectedRoutes:
    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.get("/v1/users/me")
        assert response.status_code in (401, 403)

    async def test_garbage_token(self, client: AsyncClient) -> None:
        response = await client.get(
            "/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.json() == {"status": "healthy"}


async def test_ready(client: AsyncClient) -> None:
    response = await client.get("/ready")
    assert response.json() == {"status": "ready"}
