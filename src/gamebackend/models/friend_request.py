# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamebackend.models.base import Base, UUIDMixin, utcnow


class FriendRequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Statuses that occupy the pair. A rejected record does not block a new request.
_ACTIVE_PAIR_WHERE = "status IN ('pending', 'accepted')"


def pair_key_for(user_a: UUID, user_b: UUID) -> str:
    """Order-independent key for the unordered pair {user_a, user_b}."""
    low, high = sorted((str(user_a), str(user_b)))
    return f"{low}:{high}"


class FriendRequest(UUIDMixin, Base):
    """Directed relationship record.

    Requester and receiver are fixed at creation; an accepted record is a
    friendship that is read from either side.
    """

    __tablename__ = "friend_requests"

    requester_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    pair_key: Mapped[str] = mapped_column(String(80), nullable=False)
    status: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=FriendRequestStatus.PENDING.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    responded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    # Relationships
    requester: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[FriendRequest.requester_id]",
    )
    receiver: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[FriendRequest.receiver_id]",
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_friend_requests_status",
        ),
        CheckConstraint(
            "requester_id != receiver_id",
            name="ck_friend_requests_not_self",
        ),
        Index("idx_friend_requests_requester", "requester_id", "status"),
        Index("idx_friend_requests_receiver", "receiver_id", "status"),
        Index(
            "uq_friend_requests_active_pair",
            "pair_key",
            unique=True,
            postgresql_where=text(_ACTIVE_PAIR_WHERE),
            sqlite_where=text(_ACTIVE_PAIR_WHERE),
        ),
    )
