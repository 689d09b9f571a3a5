"""
Article use cases.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from categories import repository as categories_repository
from content import workflow
from content.workflow import ContentKind
from core import pagination
from core.errors import ReferenceNotFound

from . import repository

ARTICLE = ContentKind(
    name="articles",
    label="article",
    repository=repository,
    file_fields=("images", "videos"),
    featured_field="featured_media",
)


async def list_published(
    *,
    page: int | None = None,
    limit: int | None = None,
    search: str = "",
    category_id: str | None = None,
    tag_id: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> dict[str, Any]:
    paging = pagination.page_request(page, limit)
    return await repository.list_articles(
        page=paging.page,
        page_size=paging.limit,
        sort_by=sort_by,
        sort_order=sort_order,
        status="published",
        tag_id=tag_id,
        category_id=category_id,
        search=search,
    )


async def create_article(
    *,
    user: dict | None,
    fields: Mapping[str, Any],
    tags: Any = None,
    tag_ids: Any = None,
    uploads: Mapping[str, Sequence[Any]] | None = None,
) -> dict:
    category_id = fields.get("category_id")
    if category_id and await categories_repository.find_by_id(category_id) is None:
        raise ReferenceNotFound(category_id, kind="Category")

    return await workflow.create_content(
        ARTICLE,
        user=user,
        fields=fields,
        tags=tags,
        tag_ids=tag_ids,
        uploads=uploads,
    )
