# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamebackend.models.base import Base, UUIDMixin, utcnow

_ACTIVE_OFFER_WHERE = "buyer_id IS NULL"


class UserItemOffer(UUIDMixin, Base):
    """Peer-to-peer listing of one owned item instance.

    Active while ``buyer_id`` is NULL. Once bought the row is kept as an
    immutable sale record.
    """

    __tablename__ = "user_item_offers"

    user_item_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_items.id", ondelete="CASCADE"),
        nullable=False,
    )
    seller_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
    )
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    buyer_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id"),
        default=None,
    )
    bought_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    # Relationships
    user_item: Mapped[UserItem] = relationship()  # type: ignore[name-defined]  # noqa: F821
    seller: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[UserItemOffer.seller_id]",
    )
    buyer: Mapped[User | None] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[UserItemOffer.buyer_id]",
    )

    @property
    def is_active(self) -> bool:
        return self.buyer_id is None

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_user_item_offers_price"),
        CheckConstraint(
            "(buyer_id IS NULL AND bought_at IS NULL)"
            " OR (buyer_id IS NOT NULL AND bought_at IS NOT NULL)",
            name="ck_user_item_offers_sale_fields",
        ),
        Index("idx_user_item_offers_seller", "seller_id"),
        Index("idx_user_item_offers_buyer", "buyer_id"),
        Index(
            "uq_user_item_offers_active_item",
            "user_item_id",
            unique=True,
            postgresql_where=text(_ACTIVE_OFFER_WHERE),
            sqlite_where=text(_ACTIVE_OFFER_WHERE),
        ),
    )
