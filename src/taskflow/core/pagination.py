# src/taskflow/core/pagination.py

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    items: tuple[T, ...]
    page: int
    per_page: int
    total: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def paginate(items: Sequence[T], page: int = 1, per_page: int = 12) -> Page[T]:
    """
    Slice items into 1-based pages.

    Out-of-range page numbers are clamped into [1, total_pages]. An empty
    sequence yields page 1 of 0.
    """
    if per_page < 1:
        raise ValueError("per_page must be >= 1")

    total = len(items)
    total_pages = math.ceil(total / per_page)
    page = max(1, min(int(page), max(1, total_pages)))
    start = (page - 1) * per_page
    return Page(
        items=tuple(items[start : start + per_page]),
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
    )
