# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

"""Search, sorting and paging helpers shared by the listing queries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import ColumnElement, Select, String, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from gamebackend.schemas.common import PagedQuery, SortDirection


def apply_search(
    stmt: Select[Any], phrase: str | None, *columns: ColumnElement[Any]
) -> Select[Any]:
    """Keep rows where any of ``columns`` contains ``phrase``, ignoring case."""
    if phrase is None or not phrase.strip():
        return stmt
    needle = phrase.strip().lower()
    return stmt.where(
        or_(
            *(
                func.lower(col, type_=String).contains(needle, autoescape=True)
                for col in columns
            )
        )
    )


def apply_sorting(
    stmt: Select[Any],
    sort_by: str | None,
    direction: SortDirection,
    selectors: Mapping[str, ColumnElement[Any]],
    default: ColumnElement[Any],
) -> Select[Any]:
    expr = selectors.get(sort_by, default) if sort_by else default
    return stmt.order_by(expr.desc() if direction == "desc" else expr.asc())


def apply_paging(stmt: Select[Any], query: PagedQuery) -> Select[Any]:
    return stmt.limit(query.page_size).offset(query.offset)


async def count_rows(session: AsyncSession, stmt: Select[Any]) -> int:
    """Count the rows ``stmt`` would return, ignoring any ORDER BY."""
    subquery = stmt.order_by(None).subquery()
    result = await session.execute(select(func.count()).select_from(subquery))
    return result.scalar_one()
