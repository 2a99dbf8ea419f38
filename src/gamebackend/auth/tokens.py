# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from gamebackend.config import get_settings

_ALGORITHM = "HS256"


def create_access_token(user_id: UUID) -> str:
    """Create a signed access token identifying the player."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> UUID:
    """Return the user id carried by the token.

    Raises jwt.InvalidTokenError on any validation failure and ValueError when
    the subject is not a UUID.
    """
    settings = get_settings()
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[_ALGORITHM])
    return UUID(payload["sub"])
