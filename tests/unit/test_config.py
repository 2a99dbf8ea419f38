# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gamebackend.config import Settings

_SECRET = "a" * 32


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(database_url="sqlite+aiosqlite://", jwt_secret_key=_SECRET)
        assert settings.initial_balance == 1000
        assert settings.max_pending_requests_per_user == 100
        assert settings.max_friends_per_user == 500
        assert settings.min_offer_price == 0
        assert settings.max_offer_price == 1_000_000

    def test_short_jwt_secret_rejected(self) -> None:
        with pytest.raises(ValidationError, match="jwt_secret_key"):
            Settings(database_url="sqlite+aiosqlite://", jwt_secret_key="short")

    def test_inverted_price_bounds_rejected(self) -> None:
        with pytest.raises(ValidationError, match="offer price bounds"):
            Settings(
                database_url="sqlite+aiosqlite://",
                jwt_secret_key=_SECRET,
                min_offer_price=10,
                max_offer_price=5,
            )
