"""
Article persistence.
"""

from __future__ import annotations

from typing import Any

from content import repository as content_repository
from content.repository import ContentTable

ARTICLES = ContentTable(
    kind="articles",
    table="articles",
    columns=(
        "id",
        "title",
        "title_ar",
        "content",
        "content_ar",
        "summary",
        "summary_ar",
        "category_id",
        "status",
        "author_id",
        "author_email",
        "featured_media",
        "images",
        "videos",
        "created_at",
        "updated_at",
    ),
    search_columns=("title", "title_ar", "summary", "summary_ar"),
)


async def list_articles(
    *,
    page: int,
    page_size: int,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    status: str | None = None,
    tag_id: str | None = None,
    category_id: str | None = None,
    search: str = "",
) -> dict[str, Any]:
    return await content_repository.list_page(
        ARTICLES,
        page=page,
        limit=page_size,
        status=status,
        search=search,
        tag_id=tag_id,
        equals={"category_id": category_id},
        sort_by=sort_by,
        sort_order=sort_order,
    )


async def find_by_id(article_id: str) -> dict | None:
    return await content_repository.find_by_id(ARTICLES, article_id)


async def insert(values: dict[str, Any]) -> dict:
    return await content_repository.insert(ARTICLES, values)


async def attach_files(article_id: str, files_by_field: dict[str, list[dict]]) -> None:
    await content_repository.append_files(ARTICLES, article_id, files_by_field)


async def set_featured_media(article_id: str, media: dict) -> None:
    await content_repository.set_value(ARTICLES, article_id, "featured_media", media)


async def delete(article_id: str) -> bool:
    return await content_repository.delete(ARTICLES, article_id)
