"""
Announcement persistence.
"""

from __future__ import annotations

from typing import Any

from content import repository as content_repository
from content.repository import ContentTable

ANNOUNCEMENTS = ContentTable(
    kind="announcements",
    table="announcements",
    columns=(
        "id",
        "title",
        "title_ar",
        "description",
        "description_ar",
        "scope_of_work",
        "scope_of_work_ar",
        "reference_number",
        "date",
        "status",
        "author_id",
        "author_email",
        "files",
        "created_at",
        "updated_at",
    ),
    search_columns=("title", "title_ar", "description", "description_ar", "reference_number"),
)


async def list_announcements(
    *,
    page: int,
    page_size: int,
    status: str | None = None,
    search: str = "",
) -> dict[str, Any]:
    return await content_repository.list_page(
        ANNOUNCEMENTS,
        page=page,
        limit=page_size,
        status=status,
        search=search,
        sort_by="created_at",
        sort_order="desc",
    )


async def list_published() -> list[dict]:
    return await content_repository.list_all(ANNOUNCEMENTS, status="published")


async def find_by_id(announcement_id: str) -> dict | None:
    return await content_repository.find_by_id(ANNOUNCEMENTS, announcement_id)


async def insert(values: dict[str, Any]) -> dict:
    return await content_repository.insert(ANNOUNCEMENTS, values)


async def attach_files(announcement_id: str, files_by_field: dict[str, list[dict]]) -> None:
    await content_repository.append_files(ANNOUNCEMENTS, announcement_id, files_by_field)


async def delete(announcement_id: str) -> bool:
    return await content_repository.delete(ANNOUNCEMENTS, announcement_id)
