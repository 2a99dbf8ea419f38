# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.auth.dependencies import get_current_user
from gamebackend.db.session import get_db
from gamebackend.models.user import User
from gamebackend.schemas.common import PagedResponse
from gamebackend.schemas.user import (
    GameInfo,
    UserItemQuery,
    UserItemResponse,
    UserSearchQuery,
    UserSearchResult,
)
from gamebackend.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=GameInfo)
async def get_game_info(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> GameInfo:
    return await UserService(db).get_game_info(user.id)


@router.get("/me/items", response_model=PagedResponse[UserItemResponse])
async def list_my_items(
    query: Annotated[UserItemQuery, Query()],
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PagedResponse[UserItemResponse]:
    return await UserService(db).list_items(user.id, query)


@router.get("/search", response_model=PagedResponse[UserSearchResult])
async def search_users(
    query: Annotated[UserSearchQuery, Query()],
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PagedResponse[UserSearchResult]:
    return await UserService(db).search_users(query)
