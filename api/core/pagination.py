"""
Pagination helpers shared by list endpoints and the content aggregator.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from . import config


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_request(page: int | None, limit: int | None) -> PageRequest:
    """
    Clamp caller paging to page >= 1 and 1 <= limit <= MAX_PAGE_SIZE.
    """
    page = max(1, int(page or 1))
    limit = int(limit or config.default_page_size())
    limit = max(1, min(limit, config.max_page_size()))
    return PageRequest(page=page, limit=limit)


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def metadata(*, total: int, page: int, limit: int, pages: int | None = None) -> dict[str, int]:
    return {
        "total": int(total),
        "page": int(page),
        "limit": int(limit),
        "total_pages": int(pages if pages is not None else total_pages(total, limit)),
    }


def list_all_result(items: list[Any]) -> dict[str, Any]:
    """
    Shape an unpaged listing as a single page holding every row.
    """
    return {"items": items, **metadata(total=len(items), page=1, limit=len(items), pages=1)}
