# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

"""Peer-to-peer item market.

A purchase moves money and ownership in one transaction. Each write in it is
conditional on the state validated beforehand, and if any of them matches no
row the whole transaction is rolled back.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.errors import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    UnprocessableEntityError,
)
from gamebackend.models.user_item_offer import UserItemOffer
from gamebackend.repositories.user_item_offer_repository import UserItemOfferRepository
from gamebackend.repositories.user_item_repository import UserItemRepository
from gamebackend.repositories.user_repository import UserRepository
from gamebackend.schemas.common import PagedQuery, PagedResponse
from gamebackend.schemas.user_item_offer import OfferResponse

logger = logging.getLogger(__name__)

_ALREADY_SOLD = "This offer has already been sold."


class UserItemOfferService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.offers = UserItemOfferRepository(session)
        self.items = UserItemRepository(session)
        self.users = UserRepository(session)

    async def create_offer(self, owner_id: UUID, user_item_id: UUID, price: int) -> UUID:
        logger.info("User %s is listing item %s for %d", owner_id, user_item_id, price)

        current_owner = await self.items.get_owner(user_item_id)
        if current_owner is None:
            raise NotFoundError("UserItem", user_item_id)
        if current_owner != owner_id:
            logger.warning(
                "User %s attempted to list item %s owned by %s",
                owner_id,
                user_item_id,
                current_owner,
            )
            raise ForbiddenError("You do not own this item.")
        if await self.offers.get_active_for_item(user_item_id) is not None:
            raise ConflictError.for_field(
                "user_item_id", "An active offer already exists for this item."
            )

        try:
            offer = await self.offers.create(
                UserItemOffer(user_item_id=user_item_id, seller_id=owner_id, price=price)
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError.for_field(
                "user_item_id", "An active offer already exists for this item."
            )

        logger.info("Offer %s created for item %s", offer.id, user_item_id)
        return offer.id

    async def cancel_offer(self, caller_id: UUID, offer_id: UUID) -> None:
        logger.info("User %s is cancelling offer %s", caller_id, offer_id)

        offer = await self.offers.get_by_id(offer_id)
        if offer is None:
            raise NotFoundError("UserItemOffer", offer_id)
        current_owner = await self.items.get_owner(offer.user_item_id)
        if current_owner != caller_id or offer.seller_id != caller_id:
            logger.warning("User %s attempted to cancel offer %s", caller_id, offer_id)
            raise ForbiddenError("You do not own this offer.")
        if not offer.is_active:
            raise InvalidOperationError(_ALREADY_SOLD)

        if not await self.offers.delete_active(offer_id):
            await self.session.rollback()
            raise InvalidOperationError(_ALREADY_SOLD)
        await self.session.commit()
        logger.info("Offer %s cancelled", offer_id)

    async def purchase_offer(self, buyer_id: UUID, offer_id: UUID) -> None:
        """Buy a listed item: debit buyer, credit seller, hand over the item."""
        logger.info("User %s is purchasing offer %s", buyer_id, offer_id)

        offer = await self.offers.get_by_id(offer_id)
        if offer is None:
            raise NotFoundError("UserItemOffer", offer_id)
        if not offer.is_active:
            raise ConflictError.for_field("Offer", _ALREADY_SOLD)
        price, user_item_id = offer.price, offer.user_item_id

        seller_id = await self.items.get_owner(user_item_id)
        if seller_id is None:
            raise NotFoundError("UserItem", user_item_id)
        if seller_id == buyer_id:
            raise UnprocessableEntityError.for_field(
                "Offer", "You cannot purchase your own item."
            )

        balance = await self.users.get_balance(buyer_id)
        if balance is None:
            raise NotFoundError("User", buyer_id)
        if balance < price:
            logger.warning(
                "User %s has insufficient balance (%d) for offer %s (price %d)",
                buyer_id,
                balance,
                offer_id,
                price,
            )
            raise UnprocessableEntityError.for_field(
                "Balance",
                f"Insufficient balance. Required: {price}, Available: {balance}",
            )

        if not await self.offers.mark_sold(offer_id, buyer_id):
            await self.session.rollback()
            raise ConflictError.for_field("Offer", _ALREADY_SOLD)
        if not await self.users.adjust_balance(buyer_id, -price):
            await self.session.rollback()
            raise UnprocessableEntityError.for_field(
                "Balance", f"Insufficient balance. Required: {price}"
            )
        if not await self.users.adjust_balance(seller_id, price):
            await self.session.rollback()
            raise ConflictError.for_field("Offer", "The seller account is no longer available.")
        if not await self.items.transfer_ownership(user_item_id, seller_id, buyer_id):
            await self.session.rollback()
            raise ConflictError.for_field("Offer", "The item has changed owner.")
        await self.session.commit()

        logger.info(
            "User %s bought item %s from %s for %d",
            buyer_id,
            user_item_id,
            seller_id,
            price,
        )

    async def list_offers(self, active: bool, query: PagedQuery) -> PagedResponse[OfferResponse]:
        rows, total = await self.offers.list_offers(active, query)
        logger.debug("Fetched %d of %d offers (active=%s)", len(rows), total, active)
        return PagedResponse[OfferResponse].build(
            [OfferResponse.model_validate(row) for row in rows], total, query
        )
