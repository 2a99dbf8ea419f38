# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.models.item import Item
from gamebackend.repositories.base import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """Read access to the item catalog."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Item)

    async def list_all(self) -> list[Item]:
        result = await self.session.execute(select(Item).order_by(Item.name.asc()))
        return list(result.scalars().all())
