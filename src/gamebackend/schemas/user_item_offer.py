# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from gamebackend.config import get_settings
from gamebackend.schemas.common import PagedQuery


class CreateOfferRequest(BaseModel):
    user_item_id: UUID
    price: int

    @field_validator("price")
    @classmethod
    def _price_within_bounds(cls, value: int) -> int:
        settings = get_settings()
        if not settings.min_offer_price <= value <= settings.max_offer_price:
            raise ValueError(
                f"price must be between {settings.min_offer_price}"
                f" and {settings.max_offer_price}"
            )
        return value


class OfferQuery(PagedQuery):
    active: bool = True
    sort_by: (
        Literal[
            "name",
            "type",
            "seller_username",
            "price",
            "published_at",
            "bought_at",
            "buyer_username",
        ]
        | None
    ) = None


class OfferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_item_id: UUID
    item_id: UUID
    name: str
    item_type: str
    description: str | None
    thumbnail_url: str | None
    price: int
    seller_id: UUID
    seller_username: str
    published_at: datetime
    buyer_id: UUID | None = None
    buyer_username: str | None = None
    bought_at: datetime | None = None
