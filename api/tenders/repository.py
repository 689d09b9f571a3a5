"""
Tender persistence.
"""

from __future__ import annotations

from typing import Any

from content import repository as content_repository
from content.repository import ContentTable

TENDERS = ContentTable(
    kind="tenders",
    table="tenders",
    columns=(
        "id",
        "title",
        "title_ar",
        "description",
        "description_ar",
        "reference_number",
        "deadline",
        "status",
        "author_id",
        "author_email",
        "files",
        "created_at",
        "updated_at",
    ),
    search_columns=("title", "title_ar", "reference_number"),
)


async def list_tenders(*, page: int, page_size: int, status: str | None = None, search: str = "") -> dict[str, Any]:
    return await content_repository.list_page(TENDERS, page=page, limit=page_size, status=status, search=search)


async def list_published() -> list[dict]:
    return await content_repository.list_all(TENDERS, status="published")


async def find_by_id(tender_id: str) -> dict | None:
    return await content_repository.find_by_id(TENDERS, tender_id)


async def insert(values: dict[str, Any]) -> dict:
    return await content_repository.insert(TENDERS, values)


async def attach_files(tender_id: str, files_by_field: dict[str, list[dict]]) -> None:
    await content_repository.append_files(TENDERS, tender_id, files_by_field)


async def delete(tender_id: str) -> bool:
    return await content_repository.delete(TENDERS, tender_id)
