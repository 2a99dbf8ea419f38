# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.errors import NotFoundError, UnprocessableEntityError
from gamebackend.repositories.merchant_repository import MerchantRepository
from gamebackend.repositories.user_item_repository import UserItemRepository
from gamebackend.repositories.user_repository import UserRepository
from gamebackend.schemas.merchant import MerchantOfferResponse

logger = logging.getLogger(__name__)


class MerchantService:
    """Catalog purchases. Stock is unlimited and offers are never modified."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.merchants = MerchantRepository(session)
        self.items = UserItemRepository(session)
        self.users = UserRepository(session)

    async def get_offers(self, merchant_id: UUID) -> list[MerchantOfferResponse]:
        logger.info("Fetching offers for merchant %s", merchant_id)

        if await self.merchants.get_merchant(merchant_id) is None:
            raise NotFoundError("Merchant", merchant_id)
        offers = await self.merchants.list_offers(merchant_id)

        logger.info("Fetched %d offers for merchant %s", len(offers), merchant_id)
        return [MerchantOfferResponse.model_validate(offer) for offer in offers]

    async def purchase_offer(self, buyer_id: UUID, offer_id: UUID) -> UUID:
        """Debit the buyer and mint a new item instance; returns its id."""
        logger.info("User %s is purchasing merchant offer %s", buyer_id, offer_id)

        offer = await self.merchants.get_offer(offer_id)
        if offer is None:
            raise NotFoundError("MerchantItemOffer", offer_id)
        price, item_id = offer.price, offer.item_id

        balance = await self.users.get_balance(buyer_id)
        if balance is None:
            raise NotFoundError("User", buyer_id)
        if balance < price:
            logger.warning(
                "User %s has insufficient balance. Required: %d, Available: %d",
                buyer_id,
                price,
                balance,
            )
            raise UnprocessableEntityError.for_field(
                "Balance",
                f"Insufficient balance. Required: {price}, Available: {balance}",
            )

        if not await self.users.adjust_balance(buyer_id, -price):
            await self.session.rollback()
            raise UnprocessableEntityError.for_field(
                "Balance", f"Insufficient balance. Required: {price}"
            )
        user_item = await self.items.mint_instance(buyer_id, item_id)
        user_item_id = user_item.id
        await self.session.commit()

        logger.info(
            "User %s purchased merchant offer %s as item %s",
            buyer_id,
            offer_id,
            user_item_id,
        )
        return user_item_id
