"""
Unified content endpoints.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Header, Query

from core.errors import upstream_errors
from exchange_rates.schemas import ExchangeRate

from . import aggregator
from .localization import (
    localize_announcement,
    localize_article,
    localize_category,
    localize_tag,
    localize_tender,
    resolve_language,
)
from .schemas import UnifiedContentResponse

router = APIRouter(prefix="/content")

LOCALIZERS: dict[str, Callable[[dict, str], Any]] = {
    "articles": localize_article,
    "categories": localize_category,
    "tenders": localize_tender,
    "announcements": localize_announcement,
    "tags": lambda row, _: localize_tag(row),
    "article_tags": lambda row, _: localize_tag(row),
    "tender_tags": lambda row, _: localize_tag(row),
    "announcement_tags": lambda row, _: localize_tag(row),
    "exchange_rates": lambda row, _: ExchangeRate.model_validate(row),
}


def _split_include(values: list[str]) -> list[str]:
    # Accept both ?include=a&include=b and ?include=a,b
    kinds: list[str] = []
    for value in values:
        kinds.extend(part.strip() for part in value.split(",") if part.strip())
    return kinds


@router.get("", response_model=UnifiedContentResponse, response_model_exclude_none=True)
async def unified_content(
    include: list[str] = Query(default=[]),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    accept_language: str | None = Header(default=None),
) -> UnifiedContentResponse:
    """
    Several listings in one round trip, e.g. ?include=articles,tags.
    """
    lang = resolve_language(accept_language)
    with upstream_errors():
        result = await aggregator.unified_content(
            _split_include(include),
            page=page,
            limit=limit,
            sort_order=sort_order,
        )

    payload: dict[str, Any] = {"metadata": result.pop("metadata")}
    for kind, rows in result.items():
        payload[kind] = [LOCALIZERS[kind](row, lang) for row in rows]
    return UnifiedContentResponse(**payload)


@router.get("/by-tag/{tag_id}")
async def content_by_tag(
    tag_id: str,
    type: str = Query(default="articles"),
    accept_language: str | None = Header(default=None),
) -> dict:
    lang = resolve_language(accept_language)
    with upstream_errors():
        rows = await aggregator.content_by_tag(tag_id, type)
    return {"type": type, "items": [LOCALIZERS[type](row, lang) for row in rows], "count": len(rows)}
