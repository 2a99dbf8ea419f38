# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import enum

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from gamebackend.models.base import Base, UUIDMixin


class ItemType(str, enum.Enum):
    EQUIPPABLE_ON_HEAD = "equippable_on_head"
    EQUIPPABLE_ON_BODY = "equippable_on_body"
    CONSUMABLE = "consumable"


class Item(UUIDMixin, Base):
    """Catalog entry. Owned copies are ``UserItem`` rows."""

    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(String(256), nullable=False)
    item_type: Mapped[str] = mapped_column(String, nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String, default=None)

    __table_args__ = (
        CheckConstraint(
            "item_type IN ('equippable_on_head', 'equippable_on_body', 'consumable')",
            name="ck_items_item_type",
        ),
    )
