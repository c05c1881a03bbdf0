"""Pagination value objects shared by list and search queries."""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageInfo:
    """Position of a page inside a result set."""

    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass
class Page(Generic[T]):
    """One page of items plus the totals of the full result set."""

    items: list[T]
    info: PageInfo

    @classmethod
    def slice(cls, items: list[T], page: int, limit: int) -> "Page[T]":
        """Cut ``items`` down to the requested 1-based page.

        Pages past the end yield an empty slice with correct totals.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        start = (page - 1) * limit
        return cls(
            items=items[start : start + limit],
            info=PageInfo(page=page, limit=limit, total=len(items)),
        )
