"""
Project bilingual rows into single-language DTOs.

Text fields come in pairs: the primary (English) value under `<field>` or
`<field>_en`, the Arabic value under `<field>_ar`. The Arabic value is used
only when the language is exactly "ar" and the value is non-empty.

All functions here are pure. `now` stands in for missing timestamps and can
be injected for deterministic output.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from tags.schemas import TagSummary

from .schemas import (
    FileDescriptor,
    LocalizedAnnouncement,
    LocalizedArticle,
    LocalizedCategory,
    LocalizedTender,
)

ARABIC = "ar"
DEFAULT_LANGUAGE = "en"


def resolve_language(header: str | None) -> str:
    return ARABIC if (header or "").strip() == ARABIC else DEFAULT_LANGUAGE


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def localized(entity: Mapping[str, Any], field: str, lang: str) -> str:
    primary = entity.get(f"{field}_en", entity.get(field))
    if lang == ARABIC:
        arabic = entity.get(f"{field}_ar")
        if arabic:
            return str(arabic)
    return "" if primary is None else str(primary)


def _timestamp(value: Any, now: datetime) -> datetime:
    return value or now


def localize_file(file: Mapping[str, Any], *, now: datetime | None = None) -> FileDescriptor:
    now = now or _utc_now()
    return FileDescriptor(
        id=str(file["id"]),
        url=str(file["url"]),
        filename=str(file.get("filename") or ""),
        mimetype=str(file.get("mimetype") or ""),
        size=int(file.get("size") or 0),
        path=str(file.get("path") or ""),
        created_at=_timestamp(file.get("created_at"), now),
        updated_at=_timestamp(file.get("updated_at"), now),
    )


def _files(files: Iterable[Mapping[str, Any]] | None, now: datetime) -> list[FileDescriptor]:
    return [localize_file(f, now=now) for f in files or []]


def localize_tag(tag: Mapping[str, Any]) -> TagSummary:
    return TagSummary(
        id=str(tag["id"]),
        name=str(tag["name"]),
        name_ar=str(tag.get("name_ar") or tag["name"]),
    )


def _tags(tags: Iterable[Mapping[str, Any]] | None) -> list[TagSummary]:
    return [localize_tag(t) for t in tags or []]


def localize_article(article: Mapping[str, Any], lang: str, *, now: datetime | None = None) -> LocalizedArticle:
    now = now or _utc_now()
    featured = article.get("featured_media")
    return LocalizedArticle(
        id=str(article["id"]),
        title=localized(article, "title", lang),
        content=localized(article, "content", lang),
        summary=localized(article, "summary", lang),
        status=str(article.get("status") or ""),
        category_id=article.get("category_id"),
        author_id=str(article.get("author_id") or ""),
        author_email=str(article.get("author_email") or ""),
        featured_media=localize_file(featured, now=now) if featured else None,
        images=_files(article.get("images"), now),
        videos=_files(article.get("videos"), now),
        tags=_tags(article.get("tags")),
        created_at=_timestamp(article.get("created_at"), now),
        updated_at=_timestamp(article.get("updated_at"), now),
    )


def localize_tender(tender: Mapping[str, Any], lang: str, *, now: datetime | None = None) -> LocalizedTender:
    now = now or _utc_now()
    return LocalizedTender(
        id=str(tender["id"]),
        title=localized(tender, "title", lang),
        description=localized(tender, "description", lang),
        reference_number=str(tender.get("reference_number") or ""),
        deadline=tender.get("deadline"),
        status=str(tender.get("status") or ""),
        files=_files(tender.get("files"), now),
        author_id=str(tender.get("author_id") or ""),
        author_email=str(tender.get("author_email") or ""),
        tags=_tags(tender.get("tags")),
        created_at=_timestamp(tender.get("created_at"), now),
        updated_at=_timestamp(tender.get("updated_at"), now),
    )


def localize_announcement(
    announcement: Mapping[str, Any],
    lang: str,
    *,
    now: datetime | None = None,
) -> LocalizedAnnouncement:
    now = now or _utc_now()
    return LocalizedAnnouncement(
        id=str(announcement["id"]),
        title=localized(announcement, "title", lang),
        description=localized(announcement, "description", lang),
        scope_of_work=localized(announcement, "scope_of_work", lang),
        date=_timestamp(announcement.get("date"), now),
        status=str(announcement.get("status") or ""),
        files=_files(announcement.get("files"), now),
        author_id=str(announcement.get("author_id") or ""),
        author_email=str(announcement.get("author_email") or ""),
        reference_number=str(announcement.get("reference_number") or ""),
        tags=_tags(announcement.get("tags")),
        created_at=_timestamp(announcement.get("created_at"), now),
        updated_at=_timestamp(announcement.get("updated_at"), now),
    )


def localize_category(category: Mapping[str, Any], lang: str, *, now: datetime | None = None) -> LocalizedCategory:
    now = now or _utc_now()
    return LocalizedCategory(
        id=str(category["id"]),
        name=localized(category, "name", lang),
        created_at=_timestamp(category.get("created_at"), now),
        updated_at=_timestamp(category.get("updated_at"), now),
    )
