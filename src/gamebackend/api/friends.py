# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.auth.dependencies import get_current_user
from gamebackend.db.session import get_db
from gamebackend.models.user import User
from gamebackend.schemas.common import CreatedResponse, PagedResponse
from gamebackend.schemas.friend_request import (
    FriendQuery,
    FriendRequestQuery,
    FriendRequestResponse,
    FriendResponse,
    SendFriendRequest,
)
from gamebackend.services.friend_request_service import FriendRequestService

router = APIRouter(prefix="/friends", tags=["friends"])


@router.post("/requests", response_model=CreatedResponse, status_code=201)
async def send_friend_request(
    body: SendFriendRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CreatedResponse:
    request_id = await FriendRequestService(db).send_request(user.id, body.receiver_id)
    return CreatedResponse(id=request_id)


@router.post("/requests/{request_id}/accept", status_code=status.HTTP_204_NO_CONTENT)
async def accept_friend_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await FriendRequestService(db).accept_request(user.id, request_id)


@router.post("/requests/{request_id}/reject", status_code=status.HTTP_204_NO_CONTENT)
async def reject_friend_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await FriendRequestService(db).reject_request(user.id, request_id)


@router.delete("/requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_friend_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await FriendRequestService(db).cancel_request(user.id, request_id)


@router.get("/requests/received", response_model=PagedResponse[FriendRequestResponse])
async def list_received_requests(
    query: Annotated[FriendRequestQuery, Query()],
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PagedResponse[FriendRequestResponse]:
    return await FriendRequestService(db).list_received(user.id, query)


@router.get("/requests/sent", response_model=PagedResponse[FriendRequestResponse])
async def list_sent_requests(
    query: Annotated[FriendRequestQuery, Query()],
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PagedResponse[FriendRequestResponse]:
    return await FriendRequestService(db).list_sent(user.id, query)


@router.get("", response_model=PagedResponse[FriendResponse])
async def list_friends(
    query: Annotated[FriendQuery, Query()],
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PagedResponse[FriendResponse]:
    return await FriendRequestService(db).list_friends(user.id, query)


@router.delete("/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_friend(
    friend_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await FriendRequestService(db).remove_friend(user.id, friend_id)
