"""
Tender use cases.
"""

from __future__ import annotations

from typing import Any

from content.workflow import ContentKind
from core import pagination

from . import repository

TENDER = ContentKind(
    name="tenders",
    label="tender",
    repository=repository,
    file_fields=("files",),
)


async def list_published(*, page: int | None = None, limit: int | None = None, search: str = "") -> dict[str, Any]:
    paging = pagination.page_request(page, limit)
    return await repository.list_tenders(
        page=paging.page,
        page_size=paging.limit,
        status="published",
        search=search,
    )
