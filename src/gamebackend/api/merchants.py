# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.auth.dependencies import get_current_user
from gamebackend.db.session import get_db
from gamebackend.models.user import User
from gamebackend.schemas.common import CreatedResponse
from gamebackend.schemas.merchant import MerchantOfferResponse
from gamebackend.services.merchant_service import MerchantService

router = APIRouter(prefix="/merchants", tags=["merchants"])


@router.get("/{merchant_id}/offers", response_model=list[MerchantOfferResponse])
async def list_merchant_offers(
    merchant_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[MerchantOfferResponse]:
    return await MerchantService(db).get_offers(merchant_id)


@router.post("/offers/{offer_id}/purchase", response_model=CreatedResponse, status_code=201)
async def purchase_merchant_offer(
    offer_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CreatedResponse:
    """Buy from a merchant; returns the id of the newly minted item."""
    user_item_id = await MerchantService(db).purchase_offer(user.id, offer_id)
    return CreatedResponse(id=user_item_id)
