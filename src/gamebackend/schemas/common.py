# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Gamebackend Contributors

from __future__ import annotations

import math
from typing import Generic, Literal, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

SortDirection = Literal["asc", "desc"]


class PagedQuery(BaseModel):
    page_number: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=50)
    search_phrase: str | None = Field(None, max_length=256)
    sort_by: str | None = None
    sort_direction: SortDirection = "asc"

    @property
    def offset(self) -> int:
        return self.page_size * (self.page_number - 1)


T = TypeVar("T")


class PagedResponse(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page_number: int
    page_size: int

    @classmethod
    def build(cls, items: list[T], total: int, query: PagedQuery) -> PagedResponse[T]:
        return cls(
            items=items,
            total=total,
            page_number=query.page_number,
            page_size=query.page_size,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


class ErrorResponse(BaseModel):
    detail: str
    errors: dict[str, list[str]] | None = None


class CreatedResponse(BaseModel):
    id: UUID
