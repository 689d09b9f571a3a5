"""
Announcement use cases.
"""

from __future__ import annotations

from typing import Any

from content.workflow import ContentKind
from core import pagination
from core.errors import ValidationError

from . import repository

ANNOUNCEMENT = ContentKind(
    name="announcements",
    label="announcement",
    repository=repository,
    file_fields=("files",),
)


async def list_published(*, page: int | None = None, limit: int | None = None, search: str = "") -> dict[str, Any]:
    paging = pagination.page_request(page, limit)
    return await repository.list_announcements(
        page=paging.page,
        page_size=paging.limit,
        status="published",
        search=search,
    )


async def get_published(announcement_id: str) -> dict:
    announcement = await repository.find_by_id(announcement_id)
    if announcement is None or announcement.get("status") != "published":
        raise ValidationError("Announcement not found or not published")
    return announcement
