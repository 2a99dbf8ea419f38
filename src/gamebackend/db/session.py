# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from collections.abc import AsyncIterator
from functools import lru_cache
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gamebackend.config import get_settings


def engine_options(database_url: str, pool_size: int) -> dict[str, Any]:
    """Pool settings for ``database_url``.

    SQLite engines use a single-connection pool that takes no sizing options.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_pre_ping": True,
    }


@lru_cache
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return create_async_engine(
        settings.database_url,
        **engine_options(settings.database_url, settings.database_pool_size),
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    # Services keep reading ids after commit, so nothing expires on commit.
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request.

    Leaving the context rolls back any transaction a service left open,
    including one interrupted by task cancellation.
    """
    async with get_session_factory()() as session:
        yield session
