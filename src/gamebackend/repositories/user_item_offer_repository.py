# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, RowMapping, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from gamebackend.models.base import utcnow
from gamebackend.models.item import Item
from gamebackend.models.user import User
from gamebackend.models.user_item import UserItem
from gamebackend.models.user_item_offer import UserItemOffer
from gamebackend.repositories.base import BaseRepository
from gamebackend.repositories.querying import (
    apply_paging,
    apply_search,
    apply_sorting,
    count_rows,
)
from gamebackend.schemas.common import PagedQuery


class UserItemOfferRepository(BaseRepository[UserItemOffer]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserItemOffer)

    async def get_active_for_item(self, user_item_id: UUID) -> UserItemOffer | None:
        result = await self.session.execute(
            select(UserItemOffer).where(
                UserItemOffer.user_item_id == user_item_id,
                UserItemOffer.buyer_id.is_(None),
            )
        )
        return result.scalar_one_or_none()

    async def mark_sold(self, offer_id: UUID, buyer_id: UUID) -> bool:
        """Stamp the buyer only if nobody has bought the offer yet."""
        result = await self.session.execute(
            update(UserItemOffer)
            .where(UserItemOffer.id == offer_id, UserItemOffer.buyer_id.is_(None))
            .values(buyer_id=buyer_id, bought_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_active(self, offer_id: UUID) -> bool:
        """Delete the offer unless it has been sold in the meantime."""
        result = await self.session.execute(
            delete(UserItemOffer)
            .where(UserItemOffer.id == offer_id, UserItemOffer.buyer_id.is_(None))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def list_offers(
        self, active: bool, query: PagedQuery
    ) -> tuple[list[RowMapping], int]:
        """Active listings, or the sale history when ``active`` is False."""
        seller = aliased(User)
        buyer = aliased(User)

        stmt = (
            select(
                UserItemOffer.id.label("id"),
                UserItemOffer.user_item_id.label("user_item_id"),
                UserItemOffer.price.label("price"),
                UserItemOffer.published_at.label("published_at"),
                UserItemOffer.bought_at.label("bought_at"),
                Item.id.label("item_id"),
                Item.name.label("name"),
                Item.item_type.label("item_type"),
                Item.description.label("description"),
                Item.thumbnail_url.label("thumbnail_url"),
                seller.id.label("seller_id"),
                seller.username.label("seller_username"),
                buyer.id.label("buyer_id"),
                buyer.username.label("buyer_username"),
            )
            .join(UserItem, UserItem.id == UserItemOffer.user_item_id)
            .join(Item, Item.id == UserItem.item_id)
            .join(seller, seller.id == UserItemOffer.seller_id)
            .outerjoin(buyer, buyer.id == UserItemOffer.buyer_id)
        )

        searchable: list[ColumnElement[Any]] = [Item.name, Item.item_type, seller.username]
        selectors: dict[str, ColumnElement[Any]] = {
            "name": Item.name,
            "type": Item.item_type,
            "seller_username": seller.username,
            "price": UserItemOffer.price,
            "published_at": UserItemOffer.published_at,
        }
        if active:
            stmt = stmt.where(UserItemOffer.buyer_id.is_(None))
        else:
            stmt = stmt.where(UserItemOffer.buyer_id.is_not(None))
            searchable.append(buyer.username)
            selectors["bought_at"] = UserItemOffer.bought_at
            selectors["buyer_username"] = buyer.username

        stmt = apply_search(stmt, query.search_phrase, *searchable)
        total = await count_rows(self.session, stmt)
        stmt = apply_sorting(
            stmt,
            query.sort_by,
            query.sort_direction,
            selectors,
            UserItemOffer.published_at,
        )
        result = await self.session.execute(apply_paging(stmt, query))
        return list(result.mappings().all()), total
