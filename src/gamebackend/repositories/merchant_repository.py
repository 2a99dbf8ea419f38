# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gamebackend.models.item import Item
from gamebackend.models.merchant import Merchant, MerchantItemOffer
from gamebackend.repositories.base import BaseRepository


class MerchantRepository(BaseRepository[Merchant]):
    """Read-only merchant catalog."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Merchant)

    async def get_merchant(self, merchant_id: UUID) -> Merchant | None:
        return await self.get_by_id(merchant_id)

    async def list_offers(self, merchant_id: UUID) -> list[MerchantItemOffer]:
        result = await self.session.execute(
            select(MerchantItemOffer)
            .join(Item, Item.id == MerchantItemOffer.item_id)
            .where(MerchantItemOffer.merchant_id == merchant_id)
            .options(selectinload(MerchantItemOffer.item))
            .order_by(Item.name.asc())
        )
        return list(result.scalars().all())

    async def get_offer(self, offer_id: UUID) -> MerchantItemOffer | None:
        return await self.session.get(MerchantItemOffer, offer_id)
