# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import UUID

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.models.user import User
from gamebackend.repositories.base import BaseRepository
from gamebackend.repositories.querying import (
    apply_paging,
    apply_search,
    apply_sorting,
    count_rows,
)
from gamebackend.schemas.common import PagedQuery

_SORT_SELECTORS = {
    "username": User.username,
}


class UserRepository(BaseRepository[User]):
    """User directory and account ledger."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def exists(self, user_id: UUID) -> bool:
        result = await self.session.execute(select(exists().where(User.id == user_id)))
        return bool(result.scalar())

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def search(self, query: PagedQuery) -> tuple[list[User], int]:
        stmt = select(User).where(User.is_active.is_(True))
        stmt = apply_search(stmt, query.search_phrase, User.username)
        total = await count_rows(self.session, stmt)
        stmt = apply_sorting(
            stmt, query.sort_by, query.sort_direction, _SORT_SELECTORS, User.username
        )
        result = await self.session.execute(apply_paging(stmt, query))
        return list(result.scalars().all()), total

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    async def get_balance(self, user_id: UUID) -> int | None:
        """Read the stored balance, bypassing any instance cached in the session."""
        result = await self.session.execute(
            select(User.balance).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def adjust_balance(self, user_id: UUID, delta: int) -> bool:
        """Add ``delta`` to the balance in one conditional UPDATE.

        Returns False when the user does not exist or the result would be
        negative; nothing is written in that case.
        """
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id, User.balance + delta >= 0)
            .values(balance=User.balance + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
