# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from typing import Any
from uuid import UUID, uuid4

# Settings are read lazily, but the app module builds CORS config at import.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-chars")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gamebackend.api.auth import limiter  # noqa: E402
from gamebackend.db.session import get_db  # noqa: E402
from gamebackend.main import app  # noqa: E402
from gamebackend.models import (  # noqa: E402
    Base,
    FriendRequest,
    FriendRequestStatus,
    Item,
    ItemType,
    Merchant,
    MerchantItemOffer,
    User,
    UserItem,
    UserItemOffer,
)
from gamebackend.models.friend_request import pair_key_for  # noqa: E402


def _get_test_database_url() -> str:
    """Return the test database URL from env, falling back to SQLite."""
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Create an async engine for the test database."""
    url = _get_test_database_url()
    engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a database session that rolls back whatever is left open."""
    async with session_factory() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# Factory helpers for creating model instances in tests
# ---------------------------------------------------------------------------


def make_user(
    *,
    username: str | None = None,
    balance: int = 0,
    is_active: bool = True,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a User model instance."""
    username = username or f"player-{uuid4().hex[:8]}"
    return {
        "id": uuid4(),
        "username": username,
        "email": f"{username}@example.com",
        "password_hash": "not-a-real-hash",
        "balance": balance,
        "is_active": is_active,
    }


def make_item(
    *,
    name: str = "Test Item",
    description: str = "A test item",
    item_type: ItemType = ItemType.CONSUMABLE,
) -> dict[str, object]:
    """Return kwargs suitable for constructing an Item model instance."""
    return {
        "id": uuid4(),
        "name": name,
        "description": description,
        "item_type": item_type.value,
    }


async def create_user(
    session: AsyncSession, *, username: str | None = None, balance: int = 0
) -> User:
    user = User(**make_user(username=username, balance=balance))
    session.add(user)
    await session.commit()
    return user


async def create_item(session: AsyncSession, **kwargs: object) -> Item:
    item = Item(**make_item(**kwargs))  # type: ignore[arg-type]
    session.add(item)
    await session.commit()
    return item


async def give_item(session: AsyncSession, owner_id: UUID, item_id: UUID) -> UserItem:
    user_item = UserItem(user_id=owner_id, item_id=item_id)
    session.add(user_item)
    await session.commit()
    return user_item


async def list_item(
    session: AsyncSession, user_item: UserItem, price: int
) -> UserItemOffer:
    offer = UserItemOffer(
        user_item_id=user_item.id, seller_id=user_item.user_id, price=price
    )
    session.add(offer)
    await session.commit()
    return offer


async def create_merchant_offer(
    session: AsyncSession, item_id: UUID, price: int, *, name: str = "Test Merchant"
) -> MerchantItemOffer:
    merchant = Merchant(name=name)
    session.add(merchant)
    await session.flush()
    offer = MerchantItemOffer(merchant_id=merchant.id, item_id=item_id, price=price)
    session.add(offer)
    await session.commit()
    return offer


async def count_active_pair_records(session: AsyncSession, user_a: UUID, user_b: UUID) -> int:
    """Pending or accepted records stored for the unordered pair."""
    result = await session.execute(
        select(func.count())
        .select_from(FriendRequest)
        .where(
            FriendRequest.pair_key == pair_key_for(user_a, user_b),
            FriendRequest.status.in_(
                (FriendRequestStatus.PENDING.value, FriendRequestStatus.ACCEPTED.value)
            ),
        )
    )
    return result.scalar_one()


# ---------------------------------------------------------------------------
# HTTP client for API tests
# ---------------------------------------------------------------------------

PASSWORD = "correct-horse-battery"


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app, with every request using the test database."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()


async def register(client: AsyncClient, username: str) -> dict[str, Any]:
    """Register a player and return its user payload plus an ``auth`` header dict."""
    response = await client.post(
        "/v1/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": PASSWORD,
        },
    )
    assert response.status_code == 201, response.text
    body = response.json()
    user = body["user"]
    user["auth"] = {"Authorization": f"Bearer {body['access_token']}"}
    return user
