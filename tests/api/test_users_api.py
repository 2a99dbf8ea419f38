# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from httpx import AsyncClient

from tests.conftest import register


class TestUsers:
    async def test_game_info_for_new_player(self, client: AsyncClient) -> None:
        alice = await register(client, "alice")

        response = await client.get("/v1/users/me", headers=alice["auth"])

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == alice["id"]
        assert body["items"] == []

    async def test_empty_inventory_page(self, client: AsyncClient) -> None:
        alice = await register(client, "alice")

        response = await client.get(
            "/v1/users/me/items", params={"page_size": 5}, headers=alice["auth"]
        )

        assert response.json() == {
            "items": [],
            "total": 0,
            "page_number": 1,
            "page_size": 5,
            "total_pages": 0,
        }

    async def test_search(self, client: AsyncClient) -> None:
        alice = await register(client, "alice")
        await register(client, "alicia")
        await register(client, "bob")

        response = await client.get(
            "/v1/users/search",
            params={"search_phrase": "ALI", "sort_by": "username", "sort_direction": "desc"},
            headers=alice["auth"],
        )

        assert [u["username"] for u in response.json()["items"]] == ["alicia", "alice"]

    async def test_page_size_limit(self, client: AsyncClient) -> None:
        alice = await register(client, "alice")

        response = await client.get(
            "/v1/users/search", params={"page_size": 500}, headers=alice["auth"]
        )

        assert response.status_code == 422
