# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from fastapi import APIRouter

from gamebackend.api.auth import router as auth_router
from gamebackend.api.friends import router as friends_router
from gamebackend.api.items import router as items_router
from gamebackend.api.merchants import router as merchants_router
from gamebackend.api.offers import router as offers_router
from gamebackend.api.users import router as users_router

v1_router = APIRouter()
v1_router.include_router(auth_router)
v1_router.include_router(users_router)
v1_router.include_router(friends_router)
v1_router.include_router(offers_router)
v1_router.include_router(items_router)
v1_router.include_router(merchants_router)
