# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ItemResponse(BaseModel):
    """Catalog entry, independent of who owns copies of it."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    item_type: str
    thumbnail_url: str | None
