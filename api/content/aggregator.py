"""
Unified content: several listings in one response.

Every requested kind is fetched concurrently and the call waits for all of
them; if one fetch fails the whole aggregation fails. Each kind applies its
own paging: articles are paged with the caller's options, every other kind
returns all rows as a single page (limit == total).

Unknown kinds are skipped without error and produce no key.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from announcements import repository as announcements_repository
from articles import repository as articles_repository
from categories import repository as categories_repository
from core import pagination
from core.errors import ValidationError
from exchange_rates import repository as exchange_rates_repository
from tags import repository as tags_repository
from tenders import repository as tenders_repository

logger = logging.getLogger(__name__)

CONTENT_BY_TAG_KINDS = ("articles", "tenders", "announcements")
CONTENT_BY_TAG_PAGE_SIZE = 100


@dataclass(frozen=True)
class AggregateOptions:
    page: int
    limit: int
    sort_order: str


async def _articles(options: AggregateOptions) -> dict[str, Any]:
    return await articles_repository.list_articles(
        page=options.page,
        page_size=options.limit,
        sort_by="created_at",
        sort_order=options.sort_order,
        status="published",
    )


async def _everything(rows: Awaitable[list[dict]]) -> dict[str, Any]:
    return pagination.list_all_result(await rows)


_FETCHERS: dict[str, Callable[[AggregateOptions], Awaitable[dict[str, Any]]]] = {
    "articles": _articles,
    "categories": lambda _: _everything(categories_repository.list_all()),
    "tags": lambda _: _everything(tags_repository.list_all()),
    "tenders": lambda _: _everything(tenders_repository.list_published()),
    "announcements": lambda _: _everything(announcements_repository.list_published()),
    "exchange_rates": lambda _: _everything(exchange_rates_repository.list_all()),
    "article_tags": lambda _: _everything(tags_repository.list_for_kind("articles")),
    "tender_tags": lambda _: _everything(tags_repository.list_for_kind("tenders")),
    "announcement_tags": lambda _: _everything(tags_repository.list_for_kind("announcements")),
}

CONTENT_KINDS = tuple(_FETCHERS)


def _recognized(include: Sequence[str]) -> list[str]:
    kinds: list[str] = []
    for kind in include:
        if kind not in _FETCHERS:
            logger.debug("unified_content_unknown_kind kind=%s", kind)
            continue
        if kind not in kinds:
            kinds.append(kind)
    return kinds


async def unified_content(
    include: Sequence[str],
    *,
    page: int | None = 1,
    limit: int | None = None,
    sort_order: str = "desc",
) -> dict[str, Any]:
    """
    Returns {"metadata": {kind: paging}, kind: [rows], ...} for every
    recognized kind in `include`.
    """
    kinds = _recognized(include)
    paging = pagination.page_request(page, limit)
    options = AggregateOptions(page=paging.page, limit=paging.limit, sort_order=sort_order)

    results = await asyncio.gather(*(_FETCHERS[kind](options) for kind in kinds))

    response: dict[str, Any] = {"metadata": {}}
    for kind, result in zip(kinds, results):
        response["metadata"][kind] = pagination.metadata(
            total=result["total"],
            page=result["page"],
            limit=result["limit"],
            pages=result["total_pages"],
        )
        response[kind] = result["items"]
    return response


def _has_tag(item: dict, tag_id: str) -> bool:
    return any(str(tag.get("id")) == tag_id for tag in item.get("tags") or [])


async def content_by_tag(tag_id: str, kind: str) -> list[dict]:
    """
    Items of one kind carrying the tag.

    Articles filter in SQL with no status restriction, the same as the
    article repository listing. Tenders and announcements have no tag filter in
    their repositories, so all published rows are fetched and filtered here.
    """
    if kind == "articles":
        result = await articles_repository.list_articles(
            page=1,
            page_size=CONTENT_BY_TAG_PAGE_SIZE,
            tag_id=tag_id,
        )
        return result["items"]
    if kind == "tenders":
        return [t for t in await tenders_repository.list_published() if _has_tag(t, tag_id)]
    if kind == "announcements":
        return [a for a in await announcements_repository.list_published() if _has_tag(a, tag_id)]
    raise ValidationError("Invalid content type")
