# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.auth.dependencies import get_current_user
from gamebackend.db.session import get_db
from gamebackend.models.user import User
from gamebackend.schemas.common import CreatedResponse, PagedResponse
from gamebackend.schemas.user_item_offer import (
    CreateOfferRequest,
    OfferQuery,
    OfferResponse,
)
from gamebackend.services.user_item_offer_service import UserItemOfferService

router = APIRouter(prefix="/offers", tags=["offers"])


@router.get("", response_model=PagedResponse[OfferResponse])
async def list_offers(
    query: Annotated[OfferQuery, Query()],
    db: AsyncSession = Depends(get_db),
) -> PagedResponse[OfferResponse]:
    """Active listings by default; ``active=false`` returns the sale history."""
    return await UserItemOfferService(db).list_offers(query.active, query)


@router.post("", response_model=CreatedResponse, status_code=201)
async def create_offer(
    body: CreateOfferRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CreatedResponse:
    offer_id = await UserItemOfferService(db).create_offer(
        user.id, body.user_item_id, body.price
    )
    return CreatedResponse(id=offer_id)


@router.delete("/{offer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_offer(
    offer_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await UserItemOfferService(db).cancel_offer(user.id, offer_id)


@router.post("/{offer_id}/purchase", status_code=status.HTTP_204_NO_CONTENT)
async def purchase_offer(
    offer_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await UserItemOfferService(db).purchase_offer(user.id, offer_id)
