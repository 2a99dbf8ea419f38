# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import (
    ColumnElement,
    RowMapping,
    Select,
    and_,
    case,
    delete,
    func,
    or_,
    select,
    update,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from gamebackend.models.base import utcnow
from gamebackend.models.friend_request import (
    FriendRequest,
    FriendRequestStatus,
    pair_key_for,
)
from gamebackend.models.user import User
from gamebackend.repositories.base import BaseRepository
from gamebackend.repositories.querying import (
    apply_paging,
    apply_search,
    apply_sorting,
    count_rows,
)
from gamebackend.schemas.common import PagedQuery

_PENDING = FriendRequestStatus.PENDING.value
_ACCEPTED = FriendRequestStatus.ACCEPTED.value


def _between(user_a: UUID, user_b: UUID) -> ColumnElement[bool]:
    """Match a record between the two users in either direction."""
    return or_(
        and_(FriendRequest.requester_id == user_a, FriendRequest.receiver_id == user_b),
        and_(FriendRequest.requester_id == user_b, FriendRequest.receiver_id == user_a),
    )


def _involves(user_id: UUID) -> ColumnElement[bool]:
    return or_(
        FriendRequest.requester_id == user_id,
        FriendRequest.receiver_id == user_id,
    )


class FriendRequestRepository(BaseRepository[FriendRequest]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, FriendRequest)

    async def create_pending(self, requester_id: UUID, receiver_id: UUID) -> FriendRequest:
        return await self.create(
            FriendRequest(
                requester_id=requester_id,
                receiver_id=receiver_id,
                pair_key=pair_key_for(requester_id, receiver_id),
                status=_PENDING,
            )
        )

    async def get_accepted_between(
        self, user_a: UUID, user_b: UUID
    ) -> FriendRequest | None:
        result = await self.session.execute(
            select(FriendRequest)
            .where(_between(user_a, user_b), FriendRequest.status == _ACCEPTED)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def are_friends(self, user_a: UUID, user_b: UUID) -> bool:
        return await self.get_accepted_between(user_a, user_b) is not None

    async def get_pending_between(
        self, user_a: UUID, user_b: UUID
    ) -> FriendRequest | None:
        result = await self.session.execute(
            select(FriendRequest)
            .where(_between(user_a, user_b), FriendRequest.status == _PENDING)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def count_pending_sent(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).where(
                FriendRequest.requester_id == user_id,
                FriendRequest.status == _PENDING,
            )
        )
        return result.scalar_one()

    async def count_friends(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).where(
                _involves(user_id), FriendRequest.status == _ACCEPTED
            )
        )
        return result.scalar_one()

    async def transition(
        self,
        request_id: UUID,
        from_status: FriendRequestStatus,
        to_status: FriendRequestStatus,
        *,
        responded_at: datetime | None = None,
    ) -> bool:
        """Move the record to ``to_status`` only if it is still in ``from_status``."""
        result = await self.session.execute(
            update(FriendRequest)
            .where(
                FriendRequest.id == request_id,
                FriendRequest.status == from_status.value,
            )
            .values(status=to_status.value, responded_at=responded_at or utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_pending(self, request_id: UUID) -> bool:
        result = await self.session.execute(
            delete(FriendRequest)
            .where(FriendRequest.id == request_id, FriendRequest.status == _PENDING)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_accepted_between(self, user_a: UUID, user_b: UUID) -> bool:
        result = await self.session.execute(
            delete(FriendRequest)
            .where(_between(user_a, user_b), FriendRequest.status == _ACCEPTED)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Listings. Each projects the counterpart's identity, never the caller's.
    # ------------------------------------------------------------------

    async def _page(
        self,
        stmt: Select[Any],
        query: PagedQuery,
        search_column: ColumnElement[Any],
        selectors: dict[str, ColumnElement[Any]],
        default_sort: ColumnElement[Any],
    ) -> tuple[list[RowMapping], int]:
        stmt = apply_search(stmt, query.search_phrase, search_column)
        total = await count_rows(self.session, stmt)
        stmt = apply_sorting(
            stmt, query.sort_by, query.sort_direction, selectors, default_sort
        )
        result = await self.session.execute(apply_paging(stmt, query))
        return list(result.mappings().all()), total

    def _request_projection(self, other: Any) -> Select[Any]:
        return select(
            FriendRequest.id.label("id"),
            other.id.label("user_id"),
            other.username.label("username"),
            other.profile_picture_url.label("profile_picture_url"),
            FriendRequest.status.label("status"),
            FriendRequest.created_at.label("created_at"),
            FriendRequest.responded_at.label("responded_at"),
        )

    async def list_received(
        self, user_id: UUID, query: PagedQuery
    ) -> tuple[list[RowMapping], int]:
        requester = aliased(User)
        stmt = (
            self._request_projection(requester)
            .join(requester, requester.id == FriendRequest.requester_id)
            .where(
                FriendRequest.receiver_id == user_id,
                FriendRequest.status == _PENDING,
            )
        )
        return await self._page(
            stmt,
            query,
            requester.username,
            {"created_at": FriendRequest.created_at, "username": requester.username},
            FriendRequest.created_at,
        )

    async def list_sent(
        self, user_id: UUID, query: PagedQuery
    ) -> tuple[list[RowMapping], int]:
        receiver = aliased(User)
        stmt = (
            self._request_projection(receiver)
            .join(receiver, receiver.id == FriendRequest.receiver_id)
            .where(
                FriendRequest.requester_id == user_id,
                FriendRequest.status == _PENDING,
            )
        )
        return await self._page(
            stmt,
            query,
            receiver.username,
            {"created_at": FriendRequest.created_at, "username": receiver.username},
            FriendRequest.created_at,
        )

    async def list_friends(
        self, user_id: UUID, query: PagedQuery
    ) -> tuple[list[RowMapping], int]:
        requester = aliased(User)
        receiver = aliased(User)
        is_requester = FriendRequest.requester_id == user_id

        other_id = case((is_requester, FriendRequest.receiver_id), else_=FriendRequest.requester_id)
        other_name = case((is_requester, receiver.username), else_=requester.username)
        other_picture = case(
            (is_requester, receiver.profile_picture_url),
            else_=requester.profile_picture_url,
        )
        friends_since = func.coalesce(FriendRequest.responded_at, FriendRequest.created_at)

        stmt = (
            select(
                FriendRequest.id.label("request_id"),
                other_id.label("user_id"),
                other_name.label("username"),
                other_picture.label("profile_picture_url"),
                friends_since.label("friends_since"),
            )
            .join(requester, requester.id == FriendRequest.requester_id)
            .join(receiver, receiver.id == FriendRequest.receiver_id)
            .where(_involves(user_id), FriendRequest.status == _ACCEPTED)
        )
        return await self._page(
            stmt,
            query,
            other_name,
            {"friends_since": friends_since, "username": other_name},
            other_name,
        )
