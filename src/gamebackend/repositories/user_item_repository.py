# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import RowMapping, Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.models.item import Item
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

_SORT_SELECTORS = {
    "name": Item.name,
    "type": Item.item_type,
    "description": Item.description,
    "obtained_at": UserItem.obtained_at,
}


class UserItemRepository(BaseRepository[UserItem]):
    """Item ownership store: which user holds which item instance."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserItem)

    async def get_owner(self, user_item_id: UUID) -> UUID | None:
        result = await self.session.execute(
            select(UserItem.user_id).where(UserItem.id == user_item_id)
        )
        return result.scalar_one_or_none()

    async def transfer_ownership(
        self, user_item_id: UUID, from_user_id: UUID, to_user_id: UUID
    ) -> bool:
        """Move the instance to ``to_user_id`` if ``from_user_id`` still owns it."""
        result = await self.session.execute(
            update(UserItem)
            .where(UserItem.id == user_item_id, UserItem.user_id == from_user_id)
            .values(user_id=to_user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def mint_instance(self, user_id: UUID, item_id: UUID) -> UserItem:
        return await self.create(UserItem(user_id=user_id, item_id=item_id))

    def _owned_items_stmt(self, user_id: UUID) -> Select[Any]:
        active_offer = (
            select(UserItemOffer.id, UserItemOffer.price, UserItemOffer.user_item_id)
            .where(UserItemOffer.buyer_id.is_(None))
            .subquery()
        )
        return (
            select(
                UserItem.id.label("id"),
                UserItem.obtained_at.label("obtained_at"),
                Item.id.label("item_id"),
                Item.name.label("name"),
                Item.description.label("description"),
                Item.item_type.label("item_type"),
                Item.thumbnail_url.label("thumbnail_url"),
                active_offer.c.id.label("active_offer_id"),
                active_offer.c.price.label("active_offer_price"),
            )
            .join(Item, Item.id == UserItem.item_id)
            .outerjoin(active_offer, active_offer.c.user_item_id == UserItem.id)
            .where(UserItem.user_id == user_id)
        )

    async def list_all_for_user(self, user_id: UUID) -> list[RowMapping]:
        stmt = self._owned_items_stmt(user_id).order_by(Item.name.asc())
        result = await self.session.execute(stmt)
        return list(result.mappings().all())

    async def list_for_user(
        self, user_id: UUID, query: PagedQuery
    ) -> tuple[list[RowMapping], int]:
        stmt = apply_search(
            self._owned_items_stmt(user_id),
            query.search_phrase,
            Item.name,
            Item.item_type,
            Item.description,
        )
        total = await count_rows(self.session, stmt)
        stmt = apply_sorting(
            stmt, query.sort_by, query.sort_direction, _SORT_SELECTORS, Item.name
        )
        result = await self.session.execute(apply_paging(stmt, query))
        return list(result.mappings().all()), total
