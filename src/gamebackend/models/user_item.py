# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamebackend.models.base import Base, UUIDMixin, utcnow


class UserItem(UUIDMixin, Base):
    """A single owned instance of a catalog item."""

    __tablename__ = "user_items"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    item_id: Mapped[UUID] = mapped_column(
        ForeignKey("items.id", ondelete="RESTRICT"),
        nullable=False,
    )
    obtained_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Relationships
    user: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="items",
    )
    item: Mapped[Item] = relationship()  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        Index("idx_user_items_user", "user_id"),
        Index("idx_user_items_item", "item_id"),
    )
