# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from gamebackend.schemas.item import ItemResponse


class MerchantOfferResponse(BaseModel):
    """Fixed-price listing; stock is unlimited."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    merchant_id: UUID
    price: int
    item: ItemResponse
