# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

"""Friend request state machine.

Per unordered pair of users the lifecycle is::

    none -> pending(A->B) -> accepted | rejected
    accepted -> none   (remove friend)
    pending  -> none   (requester cancels)

Every precondition is checked before anything is written. The final write is
always conditional on the state that was validated, and the partial unique
index on ``pair_key`` rejects a second pending or accepted record for the same
pair, so concurrent callers cannot both succeed.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.config import get_settings
from gamebackend.errors import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
)
from gamebackend.models.friend_request import FriendRequest, FriendRequestStatus
from gamebackend.repositories.friend_request_repository import FriendRequestRepository
from gamebackend.repositories.user_repository import UserRepository
from gamebackend.schemas.common import PagedQuery, PagedResponse
from gamebackend.schemas.friend_request import FriendRequestResponse, FriendResponse

logger = logging.getLogger(__name__)

_ALREADY_RESPONDED = "This friend request has already been responded to."


class FriendRequestService:
    def __init__(
        self,
        session: AsyncSession,
        *,
        max_pending_requests: int | None = None,
        max_friends: int | None = None,
    ) -> None:
        self.session = session
        self.requests = FriendRequestRepository(session)
        self.users = UserRepository(session)
        if max_pending_requests is None or max_friends is None:
            settings = get_settings()
            if max_pending_requests is None:
                max_pending_requests = settings.max_pending_requests_per_user
            if max_friends is None:
                max_friends = settings.max_friends_per_user
        self.max_pending_requests = max_pending_requests
        self.max_friends = max_friends

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def send_request(self, requester_id: UUID, receiver_id: UUID) -> UUID:
        """Create a pending request and return its id.

        If the receiver already has a pending request to the requester, that
        request is accepted instead and its id is returned.
        """
        logger.info("User %s is sending a friend request to %s", requester_id, receiver_id)

        if requester_id == receiver_id:
            raise InvalidOperationError("You cannot send a friend request to yourself.")
        if not await self.users.exists(receiver_id):
            raise NotFoundError("User", receiver_id)
        if await self.requests.are_friends(requester_id, receiver_id):
            raise ConflictError.for_field(
                "receiver_id", "You are already friends with this user."
            )

        pending = await self.requests.get_pending_between(requester_id, receiver_id)
        if pending is not None:
            if pending.requester_id == receiver_id:
                await self._ensure_friend_capacity(requester_id, receiver_id)
                await self._transition(pending.id, FriendRequestStatus.ACCEPTED)
                logger.info("Automatically accepted existing friend request %s", pending.id)
                return pending.id
            raise ConflictError.for_field(
                "receiver_id", "You have already sent a friend request to this user."
            )

        if await self.requests.count_pending_sent(requester_id) >= self.max_pending_requests:
            raise InvalidOperationError(
                "You have reached the maximum number of pending friend requests "
                f"({self.max_pending_requests})."
            )
        await self._ensure_friend_capacity(requester_id, receiver_id)

        try:
            request = await self.requests.create_pending(requester_id, receiver_id)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError.for_field(
                "receiver_id", "A friend request between these users already exists."
            )

        logger.info("Friend request %s created", request.id)
        return request.id

    async def accept_request(self, current_user_id: UUID, request_id: UUID) -> None:
        logger.info("User %s is accepting friend request %s", current_user_id, request_id)

        request = await self._get_pending_addressed_to(
            current_user_id, request_id, "You can only accept friend requests sent to you."
        )
        await self._ensure_friend_capacity(request.receiver_id, request.requester_id)
        await self._transition(request.id, FriendRequestStatus.ACCEPTED)
        logger.info("Friend request %s accepted", request_id)

    async def reject_request(self, current_user_id: UUID, request_id: UUID) -> None:
        logger.info("User %s is rejecting friend request %s", current_user_id, request_id)

        request = await self._get_pending_addressed_to(
            current_user_id, request_id, "You can only reject friend requests sent to you."
        )
        await self._transition(request.id, FriendRequestStatus.REJECTED)
        logger.info("Friend request %s rejected", request_id)

    async def cancel_request(self, current_user_id: UUID, request_id: UUID) -> None:
        logger.info("User %s is cancelling friend request %s", current_user_id, request_id)

        request = await self.requests.get_by_id(request_id)
        if request is None:
            raise NotFoundError("FriendRequest", request_id)
        if request.requester_id != current_user_id:
            raise ForbiddenError("You can only cancel friend requests that you sent.")
        if request.status != FriendRequestStatus.PENDING.value:
            raise InvalidOperationError("You can only cancel pending friend requests.")

        if not await self.requests.delete_pending(request_id):
            await self.session.rollback()
            raise InvalidOperationError(_ALREADY_RESPONDED)
        await self.session.commit()
        logger.info("Friend request %s cancelled", request_id)

    async def remove_friend(self, current_user_id: UUID, other_user_id: UUID) -> None:
        logger.info("User %s is removing friend %s", current_user_id, other_user_id)

        if current_user_id == other_user_id:
            raise InvalidOperationError("Invalid friend user ID.")
        if not await self.requests.are_friends(current_user_id, other_user_id):
            raise NotFoundError("User", other_user_id)

        if not await self.requests.delete_accepted_between(current_user_id, other_user_id):
            await self.session.rollback()
            raise NotFoundError("User", other_user_id)
        await self.session.commit()
        logger.info("Friendship between %s and %s removed", current_user_id, other_user_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_received(
        self, user_id: UUID, query: PagedQuery
    ) -> PagedResponse[FriendRequestResponse]:
        logger.debug("Listing received friend requests for %s", user_id)
        rows, total = await self.requests.list_received(user_id, query)
        return PagedResponse[FriendRequestResponse].build(
            [FriendRequestResponse.model_validate(row) for row in rows], total, query
        )

    async def list_sent(
        self, user_id: UUID, query: PagedQuery
    ) -> PagedResponse[FriendRequestResponse]:
        logger.debug("Listing sent friend requests for %s", user_id)
        rows, total = await self.requests.list_sent(user_id, query)
        return PagedResponse[FriendRequestResponse].build(
            [FriendRequestResponse.model_validate(row) for row in rows], total, query
        )

    async def list_friends(
        self, user_id: UUID, query: PagedQuery
    ) -> PagedResponse[FriendResponse]:
        logger.debug("Listing friends for %s", user_id)
        rows, total = await self.requests.list_friends(user_id, query)
        return PagedResponse[FriendResponse].build(
            [FriendResponse.model_validate(row) for row in rows], total, query
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_pending_addressed_to(
        self, current_user_id: UUID, request_id: UUID, forbidden_message: str
    ) -> FriendRequest:
        request = await self.requests.get_by_id(request_id)
        if request is None:
            raise NotFoundError("FriendRequest", request_id)
        if request.receiver_id != current_user_id:
            raise ForbiddenError(forbidden_message)
        if request.status != FriendRequestStatus.PENDING.value:
            raise InvalidOperationError(_ALREADY_RESPONDED)
        return request

    async def _ensure_friend_capacity(self, user_id: UUID, other_user_id: UUID) -> None:
        if await self.requests.count_friends(user_id) >= self.max_friends:
            raise InvalidOperationError(
                f"You have reached the maximum number of friends ({self.max_friends})."
            )
        if await self.requests.count_friends(other_user_id) >= self.max_friends:
            raise InvalidOperationError(
                f"The other user has reached the maximum number of friends ({self.max_friends})."
            )

    async def _transition(self, request_id: UUID, to_status: FriendRequestStatus) -> None:
        moved = await self.requests.transition(
            request_id, FriendRequestStatus.PENDING, to_status
        )
        if not moved:
            await self.session.rollback()
            raise InvalidOperationError(_ALREADY_RESPONDED)
        await self.session.commit()

