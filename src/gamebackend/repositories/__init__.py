# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from gamebackend.repositories.base import BaseRepository
from gamebackend.repositories.friend_request_repository import FriendRequestRepository
from gamebackend.repositories.item_repository import ItemRepository
from gamebackend.repositories.merchant_repository import MerchantRepository
from gamebackend.repositories.user_item_offer_repository import UserItemOfferRepository
from gamebackend.repositories.user_item_repository import UserItemRepository
from gamebackend.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "FriendRequestRepository",
    "ItemRepository",
    "MerchantRepository",
    "UserItemOfferRepository",
    "UserItemRepository",
    "UserRepository",
]
