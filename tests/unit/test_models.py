# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from gamebackend.models.base import Base, TimestampMixin, UUIDMixin
from gamebackend.models.friend_request import (
    FriendRequest,
    FriendRequestStatus,
    pair_key_for,
)
from gamebackend.models.item import Item, ItemType
from gamebackend.models.merchant import MerchantItemOffer
from gamebackend.models.user import User
from gamebackend.models.user_item_offer import UserItemOffer


class TestPairKey:
    def test_pair_key_is_order_independent(self) -> None:
        a, b = uuid4(), uuid4()
        assert pair_key_for(a, b) == pair_key_for(b, a)

    def test_pair_key_distinguishes_pairs(self) -> None:
        a, b, c = uuid4(), uuid4(), uuid4()
        assert pair_key_for(a, b) != pair_key_for(a, c)

    def test_pair_key_fits_column(self) -> None:
        key = pair_key_for(uuid4(), uuid4())
        assert len(key) <= FriendRequest.__table__.c["pair_key"].type.length


class TestFriendRequestDefaults:
    def test_status_default_is_pending(self) -> None:
        status_col = FriendRequest.__table__.c["status"]
        assert status_col.default is not None
        assert status_col.default.arg == FriendRequestStatus.PENDING.value

    def test_status_values_are_lowercase_strings(self) -> None:
        assert [s.value for s in FriendRequestStatus] == ["pending", "accepted", "rejected"]

    def test_active_pair_index_is_unique_and_partial(self) -> None:
        index = next(
            i for i in FriendRequest.__table__.indexes if i.name == "uq_friend_requests_active_pair"
        )
        assert index.unique
        assert "pending" in str(index.dialect_options["postgresql"]["where"])
        assert "accepted" in str(index.dialect_options["sqlite"]["where"])


class TestUserItemOffer:
    def test_offer_without_buyer_is_active(self) -> None:
        offer = UserItemOffer(user_item_id=uuid4(), seller_id=uuid4(), price=10)
        assert offer.is_active

    def test_offer_with_buyer_is_not_active(self) -> None:
        offer = UserItemOffer(
            user_item_id=uuid4(),
            seller_id=uuid4(),
            price=10,
            buyer_id=uuid4(),
            bought_at=datetime.now(timezone.utc),
        )
        assert not offer.is_active

    def test_active_offer_index_is_unique_and_partial(self) -> None:
        index = next(
            i
            for i in UserItemOffer.__table__.indexes
            if i.name == "uq_user_item_offers_active_item"
        )
        assert index.unique
        assert "buyer_id IS NULL" in str(index.dialect_options["postgresql"]["where"])


class TestUserDefaults:
    def test_balance_defaults_to_zero(self) -> None:
        balance_col = User.__table__.c["balance"]
        assert balance_col.default is not None
        assert balance_col.default.arg == 0

    def test_balance_has_non_negative_check(self) -> None:
        names = {c.name for c in User.__table__.constraints}
        assert "ck_users_balance_non_negative" in names


class TestItemType:
    def test_item_types(self) -> None:
        assert {t.value for t in ItemType} == {
            "equippable_on_head",
            "equippable_on_body",
            "consumable",
        }

    def test_item_accepts_type_value(self) -> None:
        item = Item(name="Cap", description="A cap", item_type=ItemType.EQUIPPABLE_ON_HEAD.value)
        assert item.item_type == "equippable_on_head"


class TestMixins:
    def test_models_share_base(self) -> None:
        for model in (User, Item, FriendRequest, UserItemOffer, MerchantItemOffer):
            assert issubclass(model, Base)
            assert issubclass(model, UUIDMixin)

    def test_user_has_timestamps(self) -> None:
        assert issubclass(User, TimestampMixin)
        assert "created_at" in User.__table__.c
        assert "updated_at" in User.__table__.c
