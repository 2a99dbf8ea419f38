# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from gamebackend.schemas.common import PagedQuery


class SendFriendRequest(BaseModel):
    receiver_id: UUID


class FriendRequestQuery(PagedQuery):
    sort_by: Literal["created_at", "username"] | None = None


class FriendQuery(PagedQuery):
    sort_by: Literal["friends_since", "username"] | None = None


class FriendRequestResponse(BaseModel):
    """A pending request, seen from the caller's side.

    user_id, username and profile_picture_url always describe the
    other party.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    username: str
    profile_picture_url: str | None
    status: str
    created_at: datetime
    responded_at: datetime | None


class FriendResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    request_id: UUID
    user_id: UUID
    username: str
    profile_picture_url: str | None
    friends_since: datetime
