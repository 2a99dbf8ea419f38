# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.repositories.user_item_repository import UserItemRepository
from gamebackend.repositories.user_repository import UserRepository
from gamebackend.schemas.common import PagedQuery
from tests.conftest import create_item, create_user, give_item, list_item


class TestLedger:
    async def test_adjust_balance_credits_and_debits(self, db_session: AsyncSession) -> None:
        user = await create_user(db_session, balance=100)
        repo = UserRepository(db_session)

        assert await repo.adjust_balance(user.id, -40)
        assert await repo.adjust_balance(user.id, 15)
        await db_session.commit()

        assert await repo.get_balance(user.id) == 75

    async def test_overdraft_is_refused(self, db_session: AsyncSession) -> None:
        user = await create_user(db_session, balance=30)
        repo = UserRepository(db_session)

        assert not await repo.adjust_balance(user.id, -31)
        assert await repo.get_balance(user.id) == 30

    async def test_debit_to_exactly_zero(self, db_session: AsyncSession) -> None:
        user = await create_user(db_session, balance=30)
        repo = UserRepository(db_session)

        assert await repo.adjust_balance(user.id, -30)
        assert await repo.get_balance(user.id) == 0

    async def test_missing_user(self, db_session: AsyncSession) -> None:
        repo = UserRepository(db_session)
        assert not await repo.adjust_balance(uuid4(), 10)
        assert await repo.get_balance(uuid4()) is None
        assert not await repo.exists(uuid4())


class TestDirectory:
    async def test_lookup_by_username_and_email(self, db_session: AsyncSession) -> None:
        user = await create_user(db_session, username="hilda")
        repo = UserRepository(db_session)

        assert (await repo.get_by_username("hilda")).id == user.id
        assert (await repo.get_by_email("hilda@example.com")).id == user.id
        assert await repo.exists(user.id)

    async def test_search_matches_substring_ignoring_case(
        self, db_session: AsyncSession
    ) -> None:
        for name in ("DragonSlayer", "dragonfly", "knight"):
            await create_user(db_session, username=name)
        repo = UserRepository(db_session)

        users, total = await repo.search(PagedQuery(search_phrase="DRAGON"))

        assert total == 2
        assert [u.username for u in users] == ["DragonSlayer", "dragonfly"]

    async def test_search_escapes_wildcards(self, db_session: AsyncSession) -> None:
        await create_user(db_session, username="one_two")
        await create_user(db_session, username="oneXtwo")
        repo = UserRepository(db_session)

        users, total = await repo.search(PagedQuery(search_phrase="e_t"))

        assert total == 1
        assert users[0].username == "one_two"

    async def test_search_pages(self, db_session: AsyncSession) -> None:
        for i in range(5):
            await create_user(db_session, username=f"paged-{i}")
        repo = UserRepository(db_session)

        users, total = await repo.search(
            PagedQuery(search_phrase="paged", page_number=2, page_size=2, sort_direction="desc")
        )

        assert total == 5
        assert [u.username for u in users] == ["paged-2", "paged-1"]


class TestOwnership:
    async def test_transfer_requires_current_owner(self, db_session: AsyncSession) -> None:
        alice = await create_user(db_session)
        bob = await create_user(db_session)
        carol = await create_user(db_session)
        item = await create_item(db_session)
        owned = await give_item(db_session, alice.id, item.id)
        repo = UserItemRepository(db_session)

        assert not await repo.transfer_ownership(owned.id, bob.id, carol.id)
        assert await repo.transfer_ownership(owned.id, alice.id, bob.id)
        await db_session.commit()

        assert await repo.get_owner(owned.id) == bob.id

    async def test_mint_creates_new_instance(self, db_session: AsyncSession) -> None:
        alice = await create_user(db_session)
        item = await create_item(db_session)
        repo = UserItemRepository(db_session)

        first = await repo.mint_instance(alice.id, item.id)
        second = await repo.mint_instance(alice.id, item.id)
        await db_session.commit()

        assert first.id != second.id
        assert await repo.get_owner(first.id) == alice.id

    async def test_inventory_includes_active_offer(self, db_session: AsyncSession) -> None:
        alice = await create_user(db_session)
        helm = await create_item(db_session, name="Helm")
        potion = await create_item(db_session, name="Potion")
        listed = await give_item(db_session, alice.id, helm.id)
        await give_item(db_session, alice.id, potion.id)
        offer = await list_item(db_session, listed, 75)
        repo = UserItemRepository(db_session)

        rows, total = await repo.list_for_user(alice.id, PagedQuery())

        assert total == 2
        by_name = {row["name"]: row for row in rows}
        assert by_name["Helm"]["active_offer_id"] == offer.id
        assert by_name["Helm"]["active_offer_price"] == 75
        assert by_name["Potion"]["active_offer_id"] is None

    async def test_inventory_search_over_description(self, db_session: AsyncSession) -> None:
        alice = await create_user(db_session)
        cap = await create_item(db_session, name="Cap", description="Woolly and warm")
        sword = await create_item(db_session, name="Sword", description="Sharp")
        await give_item(db_session, alice.id, cap.id)
        await give_item(db_session, alice.id, sword.id)
        repo = UserItemRepository(db_session)

        rows, total = await repo.list_for_user(alice.id, PagedQuery(search_phrase="WARM"))

        assert total == 1
        assert rows[0]["name"] == "Cap"
