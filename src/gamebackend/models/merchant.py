# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamebackend.models.base import Base, UUIDMixin


class Merchant(UUIDMixin, Base):
    __tablename__ = "merchants"

    name: Mapped[str] = mapped_column(String(64), nullable=False)

    # Relationships
    offers: Mapped[list[MerchantItemOffer]] = relationship(
        back_populates="merchant",
    )


class MerchantItemOffer(UUIDMixin, Base):
    """Fixed-price catalog listing with unlimited stock.

    Purchases never modify this row.
    """

    __tablename__ = "merchant_item_offers"

    merchant_id: Mapped[UUID] = mapped_column(
        ForeignKey("merchants.id", ondelete="CASCADE"),
        nullable=False,
    )
    item_id: Mapped[UUID] = mapped_column(
        ForeignKey("items.id", ondelete="RESTRICT"),
        nullable=False,
    )
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    merchant: Mapped[Merchant] = relationship(back_populates="offers")
    item: Mapped[Item] = relationship()  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_merchant_item_offers_price"),
        Index("idx_merchant_item_offers_merchant", "merchant_id"),
    )
