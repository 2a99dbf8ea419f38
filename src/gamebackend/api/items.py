# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.db.session import get_db
from gamebackend.schemas.item import ItemResponse
from gamebackend.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=list[ItemResponse])
async def list_items(db: AsyncSession = Depends(get_db)) -> list[ItemResponse]:
    return await ItemService(db).list_all()


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: UUID, db: AsyncSession = Depends(get_db)) -> ItemResponse:
    return await ItemService(db).get_by_id(item_id)
