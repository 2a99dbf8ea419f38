# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str
    environment: str = "production"
    log_level: str = "info"
    cors_origins: list[str] = []
    database_pool_size: int = 20

    # Auth
    jwt_secret_key: str
    access_token_expire_minutes: int = 1440

    # Economy
    initial_balance: int = 1000
    min_offer_price: int = 0
    max_offer_price: int = 1_000_000

    # Social
    max_pending_requests_per_user: int = 100
    max_friends_per_user: int = 500

    model_config = {"env_file": ".env"}

    @model_validator(mode="after")
    def _validate_jwt_secret(self) -> "Settings":
        if len(self.jwt_secret_key) < 32:
            raise ValueError("jwt_secret_key must be at least 32 characters")
        return self

    @model_validator(mode="after")
    def _validate_offer_price_bounds(self) -> "Settings":
        if self.min_offer_price < 0 or self.max_offer_price < self.min_offer_price:
            raise ValueError("offer price bounds must satisfy 0 <= min <= max")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Lazy-loaded to avoid import-time failures."""
    return Settings()
