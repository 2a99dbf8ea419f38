# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from gamebackend.models.base import Base, TimestampMixin, UUIDMixin
from gamebackend.models.friend_request import FriendRequest, FriendRequestStatus
from gamebackend.models.item import Item, ItemType
from gamebackend.models.merchant import Merchant, MerchantItemOffer
from gamebackend.models.user import User
from gamebackend.models.user_item import UserItem
from gamebackend.models.user_item_offer import UserItemOffer

__all__ = [
    "Base",
    "FriendRequest",
    "FriendRequestStatus",
    "Item",
    "ItemType",
    "Merchant",
    "MerchantItemOffer",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "UserItem",
    "UserItemOffer",
]
