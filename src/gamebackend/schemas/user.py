# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from gamebackend.schemas.common import PagedQuery


class UserItemQuery(PagedQuery):
    sort_by: Literal["name", "type", "description", "obtained_at"] | None = None


class UserSearchQuery(PagedQuery):
    sort_by: Literal["username"] | None = None


class UserItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    item_id: UUID
    name: str
    description: str | None
    item_type: str
    thumbnail_url: str | None
    obtained_at: datetime
    active_offer_id: UUID | None = None
    active_offer_price: int | None = None


class GameInfo(BaseModel):
    id: UUID
    username: str
    balance: int
    profile_picture_url: str | None
    items: list[UserItemResponse]


class UserSearchResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    profile_picture_url: str | None
