# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.errors import NotFoundError
from gamebackend.repositories.item_repository import ItemRepository
from gamebackend.schemas.item import ItemResponse

logger = logging.getLogger(__name__)


class ItemService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.items = ItemRepository(session)

    async def get_by_id(self, item_id: UUID) -> ItemResponse:
        logger.info("Getting item %s", item_id)
        item = await self.items.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        return ItemResponse.model_validate(item)

    async def list_all(self) -> list[ItemResponse]:
        logger.info("Getting all items")
        return [ItemResponse.model_validate(item) for item in await self.items.list_all()]
