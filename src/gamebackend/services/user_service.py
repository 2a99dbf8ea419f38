# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.errors import NotFoundError
from gamebackend.repositories.user_item_repository import UserItemRepository
from gamebackend.repositories.user_repository import UserRepository
from gamebackend.schemas.common import PagedQuery, PagedResponse
from gamebackend.schemas.user import GameInfo, UserItemResponse, UserSearchResult

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.items = UserItemRepository(session)

    async def get_game_info(self, user_id: UUID) -> GameInfo:
        """Username, balance and full inventory of one player."""
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        rows = await self.items.list_all_for_user(user_id)
        return GameInfo(
            id=user.id,
            username=user.username,
            balance=user.balance,
            profile_picture_url=user.profile_picture_url,
            items=[UserItemResponse.model_validate(row) for row in rows],
        )

    async def list_items(
        self, user_id: UUID, query: PagedQuery
    ) -> PagedResponse[UserItemResponse]:
        rows, total = await self.items.list_for_user(user_id, query)
        logger.debug("Fetched %d of %d items for user %s", len(rows), total, user_id)
        return PagedResponse[UserItemResponse].build(
            [UserItemResponse.model_validate(row) for row in rows], total, query
        )

    async def search_users(self, query: PagedQuery) -> PagedResponse[UserSearchResult]:
        users, total = await self.users.search(query)
        return PagedResponse[UserSearchResult].build(
            [UserSearchResult.model_validate(user) for user in users], total, query
        )
