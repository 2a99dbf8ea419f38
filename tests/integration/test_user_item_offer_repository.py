# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.models.user_item_offer import UserItemOffer
from gamebackend.repositories.user_item_offer_repository import UserItemOfferRepository
from gamebackend.schemas.common import PagedQuery
from tests.conftest import create_item, create_user, give_item, list_item


class TestActiveOfferUniqueness:
    async def test_second_active_offer_on_item_is_rejected(
        self, db_session: AsyncSession
    ) -> None:
        alice = await create_user(db_session)
        item = await create_item(db_session)
        owned = await give_item(db_session, alice.id, item.id)
        await list_item(db_session, owned, 10)
        repo = UserItemOfferRepository(db_session)

        with pytest.raises(IntegrityError):
            await repo.create(UserItemOffer(user_item_id=owned.id, seller_id=alice.id, price=20))
        await db_session.rollback()

    async def test_sold_offer_does_not_block_relisting(self, db_session: AsyncSession) -> None:
        alice = await create_user(db_session)
        bob = await create_user(db_session)
        item = await create_item(db_session)
        owned = await give_item(db_session, alice.id, item.id)
        offer = await list_item(db_session, owned, 10)
        repo = UserItemOfferRepository(db_session)
        assert await repo.mark_sold(offer.id, bob.id)
        await db_session.commit()

        relisted = await repo.create(UserItemOffer(user_item_id=owned.id, seller_id=bob.id, price=15))
        await db_session.commit()

        active = await repo.get_active_for_item(owned.id)
        assert active is not None
        assert active.id == relisted.id


class TestMarkSold:
    async def test_only_first_buyer_wins(self, db_session: AsyncSession) -> None:
        alice = await create_user(db_session)
        bob = await create_user(db_session)
        carol = await create_user(db_session)
        item = await create_item(db_session)
        offer = await list_item(db_session, await give_item(db_session, alice.id, item.id), 10)
        repo = UserItemOfferRepository(db_session)

        assert await repo.mark_sold(offer.id, bob.id)
        assert not await repo.mark_sold(offer.id, carol.id)
        await db_session.commit()

        reloaded = await repo.get_by_id(offer.id)
        assert reloaded is not None
        assert reloaded.buyer_id == bob.id
        assert reloaded.bought_at is not None

    async def test_delete_active_skips_sold(self, db_session: AsyncSession) -> None:
        alice = await create_user(db_session)
        bob = await create_user(db_session)
        item = await create_item(db_session)
        offer = await list_item(db_session, await give_item(db_session, alice.id, item.id), 10)
        repo = UserItemOfferRepository(db_session)
        await repo.mark_sold(offer.id, bob.id)
        await db_session.commit()

        assert not await repo.delete_active(offer.id)


class TestListOffers:
    async def _market(self, db_session: AsyncSession) -> UserItemOfferRepository:
        seller = await create_user(db_session, username="seller")
        buyer = await create_user(db_session, username="buyer")
        helm = await create_item(db_session, name="Iron Helm")
        potion = await create_item(db_session, name="Potion")
        await list_item(db_session, await give_item(db_session, seller.id, helm.id), 300)
        sold = await list_item(db_session, await give_item(db_session, seller.id, potion.id), 20)
        repo = UserItemOfferRepository(db_session)
        await repo.mark_sold(sold.id, buyer.id)
        await db_session.commit()
        return repo

    async def test_active_excludes_sold(self, db_session: AsyncSession) -> None:
        repo = await self._market(db_session)

        rows, total = await repo.list_offers(True, PagedQuery())

        assert total == 1
        assert rows[0]["name"] == "Iron Helm"
        assert rows[0]["seller_username"] == "seller"
        assert rows[0]["buyer_id"] is None

    async def test_history_returns_only_sold(self, db_session: AsyncSession) -> None:
        repo = await self._market(db_session)

        rows, total = await repo.list_offers(False, PagedQuery())

        assert total == 1
        assert rows[0]["name"] == "Potion"
        assert rows[0]["buyer_username"] == "buyer"

    async def test_history_searches_buyer(self, db_session: AsyncSession) -> None:
        repo = await self._market(db_session)

        _, history_hits = await repo.list_offers(False, PagedQuery(search_phrase="buyer"))
        _, active_hits = await repo.list_offers(True, PagedQuery(search_phrase="buyer"))

        assert history_hits == 1
        assert active_hits == 0

    async def test_sort_by_price(self, db_session: AsyncSession) -> None:
        repo = await self._market(db_session)
        alice = await create_user(db_session, username="alice")
        cheap = await create_item(db_session, name="Bread")
        await list_item(db_session, await give_item(db_session, alice.id, cheap.id), 2)

        rows, _ = await repo.list_offers(True, PagedQuery(sort_by="price", sort_direction="desc"))

        assert [row["price"] for row in rows] == [300, 2]
