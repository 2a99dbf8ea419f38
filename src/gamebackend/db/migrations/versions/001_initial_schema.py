# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

"""Initial schema: users, catalog, ownership, friend requests and offers.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ------------------------------------------------------------------
    # 1. users
    # ------------------------------------------------------------------
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.Uuid(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("username", sa.String(64), nullable=False, unique=True),
        sa.Column("email", sa.String(256), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("balance", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("profile_picture_url", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
    )

    # ------------------------------------------------------------------
    # 2. items (catalog)
    # ------------------------------------------------------------------
    op.create_table(
        "items",
        sa.Column(
            "id",
            sa.Uuid(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(256), nullable=False),
        sa.Column("item_type", sa.String(), nullable=False),
        sa.Column("thumbnail_url", sa.String(), nullable=True),
        sa.CheckConstraint(
            "item_type IN ('equippable_on_head', 'equippable_on_body', 'consumable')",
            name="ck_items_item_type",
        ),
    )

    # ------------------------------------------------------------------
    # 3. user_items (owned instances)
    # ------------------------------------------------------------------
    op.create_table(
        "user_items",
        sa.Column(
            "id",
            sa.Uuid(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "item_id",
            sa.Uuid(),
            sa.ForeignKey("items.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "obtained_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("idx_user_items_user", "user_items", ["user_id"])
    op.create_index("idx_user_items_item", "user_items", ["item_id"])

    # ------------------------------------------------------------------
    # 4. friend_requests
    # ------------------------------------------------------------------
    op.create_table(
        "friend_requests",
        sa.Column(
            "id",
            sa.Uuid(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "requester_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "receiver_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("pair_key", sa.String(80), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_friend_requests_status",
        ),
        sa.CheckConstraint(
            "requester_id != receiver_id",
            name="ck_friend_requests_not_self",
        ),
    )
    op.create_index(
        "idx_friend_requests_requester", "friend_requests", ["requester_id", "status"]
    )
    op.create_index(
        "idx_friend_requests_receiver", "friend_requests", ["receiver_id", "status"]
    )
    # At most one pending or accepted record per unordered pair.
    op.create_index(
        "uq_friend_requests_active_pair",
        "friend_requests",
        ["pair_key"],
        unique=True,
        postgresql_where=sa.text("status IN ('pending', 'accepted')"),
    )

    # ------------------------------------------------------------------
    # 5. user_item_offers
    # ------------------------------------------------------------------
    op.create_table(
        "user_item_offers",
        sa.Column(
            "id",
            sa.Uuid(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "user_item_id",
            sa.Uuid(),
            sa.ForeignKey("user_items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("seller_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column(
            "published_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("buyer_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("bought_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("price >= 0", name="ck_user_item_offers_price"),
        sa.CheckConstraint(
            "(buyer_id IS NULL AND bought_at IS NULL)"
            " OR (buyer_id IS NOT NULL AND bought_at IS NOT NULL)",
            name="ck_user_item_offers_sale_fields",
        ),
    )
    op.create_index("idx_user_item_offers_seller", "user_item_offers", ["seller_id"])
    op.create_index("idx_user_item_offers_buyer", "user_item_offers", ["buyer_id"])
    # At most one unsold offer per item instance.
    op.create_index(
        "uq_user_item_offers_active_item",
        "user_item_offers",
        ["user_item_id"],
        unique=True,
        postgresql_where=sa.text("buyer_id IS NULL"),
    )

    # ------------------------------------------------------------------
    # 6. merchants and merchant_item_offers
    # ------------------------------------------------------------------
    op.create_table(
        "merchants",
        sa.Column(
            "id",
            sa.Uuid(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("name", sa.String(64), nullable=False),
    )
    op.create_table(
        "merchant_item_offers",
        sa.Column(
            "id",
            sa.Uuid(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "merchant_id",
            sa.Uuid(),
            sa.ForeignKey("merchants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "item_id",
            sa.Uuid(),
            sa.ForeignKey("items.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.CheckConstraint("price >= 0", name="ck_merchant_item_offers_price"),
    )
    op.create_index(
        "idx_merchant_item_offers_merchant", "merchant_item_offers", ["merchant_id"]
    )


def downgrade() -> None:
    op.drop_table("merchant_item_offers")
    op.drop_table("merchants")
    op.drop_table("user_item_offers")
    op.drop_table("friend_requests")
    op.drop_table("user_items")
    op.drop_table("items")
    op.drop_table("users")
