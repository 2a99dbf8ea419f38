#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors
"""Seed the game database with a catalog, merchants and a few demo players.

The catalog has no public write endpoint, so it is written through the ORM
using DATABASE_URL. Demo players are then driven through the REST API.

Usage:
    python scripts/seed.py                                # catalog only
    python scripts/seed.py --base-url http://localhost:8000
    GAME_SEED_PASSWORD=supersecret python scripts/seed.py --base-url ...
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

import httpx
from sqlalchemy import select

from gamebackend.db.session import get_engine, get_session_factory
from gamebackend.models import Item, ItemType, Merchant, MerchantItemOffer

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

SEED_PASSWORD = os.environ.get("GAME_SEED_PASSWORD", "SeedPlayer!2026")

TIMEOUT = 30.0

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

ITEMS = [
    ("Leather Cap", "A simple cap stitched from tanned hide.", ItemType.EQUIPPABLE_ON_HEAD),
    ("Iron Helm", "Heavy, dented, dependable.", ItemType.EQUIPPABLE_ON_HEAD),
    ("Wizard Hat", "Pointed and slightly singed.", ItemType.EQUIPPABLE_ON_HEAD),
    ("Linen Tunic", "Light clothing for warm days.", ItemType.EQUIPPABLE_ON_BODY),
    ("Chainmail Shirt", "Interlocking rings of steel.", ItemType.EQUIPPABLE_ON_BODY),
    ("Health Potion", "Restores a modest amount of health.", ItemType.CONSUMABLE),
    ("Mana Potion", "Restores a modest amount of mana.", ItemType.CONSUMABLE),
    ("Bread Loaf", "Fresh from the village oven.", ItemType.CONSUMABLE),
]

# merchant name -> [(item name, price)]
MERCHANTS = {
    "Armorer Brenna": [
        ("Leather Cap", 40),
        ("Iron Helm", 180),
        ("Linen Tunic", 35),
        ("Chainmail Shirt", 320),
    ],
    "Alchemist Oswin": [
        ("Health Potion", 25),
        ("Mana Potion", 30),
        ("Wizard Hat", 250),
    ],
    "Baker Tilda": [
        ("Bread Loaf", 5),
    ],
}

PLAYERS = ["alice", "bob", "carol"]

# ---------------------------------------------------------------------------
# Catalog (ORM)
# ---------------------------------------------------------------------------


async def seed_catalog() -> dict[str, str]:
    """Create missing items, merchants and merchant offers.

    Returns merchant name -> merchant id. Existing rows are matched by name.
    """
    factory = get_session_factory()
    async with factory() as session:
        existing_items = {
            item.name: item for item in (await session.execute(select(Item))).scalars()
        }
        print("=== Catalog items ===")
        for name, description, item_type in ITEMS:
            if name in existing_items:
                print(f"  {name}: {existing_items[name].id} (exists)")
                continue
            item = Item(name=name, description=description, item_type=item_type.value)
            session.add(item)
            await session.flush()
            existing_items[name] = item
            print(f"  {name}: {item.id}")

        existing_merchants = {
            m.name: m for m in (await session.execute(select(Merchant))).scalars()
        }
        print("\n=== Merchants ===")
        merchant_ids: dict[str, str] = {}
        for merchant_name, offers in MERCHANTS.items():
            merchant = existing_merchants.get(merchant_name)
            if merchant is not None:
                merchant_ids[merchant_name] = str(merchant.id)
                print(f"  {merchant_name}: {merchant.id} (exists)")
                continue
            merchant = Merchant(name=merchant_name)
            session.add(merchant)
            await session.flush()
            for item_name, price in offers:
                session.add(
                    MerchantItemOffer(
                        merchant_id=merchant.id,
                        item_id=existing_items[item_name].id,
                        price=price,
                    )
                )
            merchant_ids[merchant_name] = str(merchant.id)
            print(f"  {merchant_name}: {merchant.id} ({len(offers)} offers)")

        await session.commit()

    await get_engine().dispose()
    return merchant_ids


# ---------------------------------------------------------------------------
# Demo players (REST)
# ---------------------------------------------------------------------------


def post(
    client: httpx.Client, url: str, json: dict | None = None, *, token: str | None = None
) -> dict | None:
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    r = client.post(url, json=json, headers=headers, timeout=TIMEOUT)
    if r.status_code >= 400:
        print(f"  ERROR {r.status_code}: {r.text[:200]}", file=sys.stderr)
        r.raise_for_status()
    return r.json() if r.content else None


def get(client: httpx.Client, url: str, *, token: str | None = None) -> dict | list:
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    r = client.get(url, headers=headers, timeout=TIMEOUT)
    r.raise_for_status()
    return r.json()


def login_or_register(client: httpx.Client, base: str, username: str) -> dict:
    email = f"{username}@example.com"
    try:
        return post(client, f"{base}/auth/register", {
            "username": username,
            "email": email,
            "password": SEED_PASSWORD,
        })
    except httpx.HTTPStatusError:
        print(f"  {username}: registration failed (may already exist), trying login...")
        return post(client, f"{base}/auth/login", {
            "email": email,
            "password": SEED_PASSWORD,
        })


def seed_players(base_url: str, merchant_ids: dict[str, str]) -> None:
    base = f"{base_url}/v1"
    client = httpx.Client()

    print("\n=== Players ===")
    sessions: dict[str, tuple[str, str]] = {}
    for username in PLAYERS:
        auth = login_or_register(client, base, username)
        sessions[username] = (auth["user"]["id"], auth["access_token"])
        print(f"  {username}: {auth['user']['id']} (balance {auth['user']['balance']})")

    print("\n=== Merchant purchases ===")
    alice_id, alice_token = sessions["alice"]
    offers = get(client, f"{base}/merchants/{merchant_ids['Armorer Brenna']}/offers")
    cap = next(o for o in offers if o["item"]["name"] == "Leather Cap")
    bought = post(client, f"{base}/merchants/offers/{cap['id']}/purchase", token=alice_token)
    print(f"  alice bought Leather Cap as {bought['id']}")

    print("\n=== Peer offer ===")
    listed = post(
        client,
        f"{base}/offers",
        {"user_item_id": bought["id"], "price": 60},
        token=alice_token,
    )
    print(f"  alice listed Leather Cap for 60: {listed['id']}")

    print("\n=== Friendships ===")
    bob_id, bob_token = sessions["bob"]
    carol_id, carol_token = sessions["carol"]
    for requester_token, receiver_id, label in (
        (alice_token, bob_id, "alice -> bob"),
        (bob_token, carol_id, "bob -> carol"),
    ):
        try:
            resp = post(
                client, f"{base}/friends/requests", {"receiver_id": receiver_id},
                token=requester_token,
            )
            print(f"  {label}: {resp['id']}")
        except httpx.HTTPStatusError:
            print(f"  {label}: already exists")

    print("\n=== Seed complete ===")
    print(f"  Players: {', '.join(PLAYERS)} / {SEED_PASSWORD}")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the game backend with demo data")
    parser.add_argument(
        "--base-url",
        default=None,
        help="API base URL; when given, demo players are created through the API",
    )
    args = parser.parse_args()
    merchant_ids = asyncio.run(seed_catalog())
    if args.base_url:
        seed_players(args.base_url, merchant_ids)
