# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.models.base import Base


T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    def __init__(self, session: AsyncSession, model: type[T]) -> None:
        self.session = session
        self.model = model

    async def get_by_id(self, entity_id: UUID) -> T | None:
        # Conditional UPDATEs bypass the identity map, so always reload.
        return await self.session.get(self.model, entity_id, populate_existing=True)

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        return entity
