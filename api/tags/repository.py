"""
Tag persistence (raw SQL).

Tags are linked to content items through one link table per content kind.
Each link table has a (item_id, tag_id) primary key, so linking the same tag
twice is a unique violation.
"""

from __future__ import annotations

import asyncpg

from core import db
from core.errors import DuplicateTag

_TAG_COLUMNS = "t.id, t.name, t.name_ar, t.created_at, t.updated_at"

LINK_TABLES: dict[str, tuple[str, str]] = {
    "articles": ("article_tags", "article_id"),
    "tenders": ("tender_tags", "tender_id"),
    "announcements": ("announcement_tags", "announcement_id"),
}


def _link_table(kind: str) -> tuple[str, str]:
    try:
        return LINK_TABLES[kind]
    except KeyError:
        raise ValueError(f"Unknown content kind for tags: {kind!r}") from None


async def find_by_id(tag_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_TAG_COLUMNS}
        FROM tags t
        WHERE t.id = $1
        """,
        tag_id,
    )


async def find_by_name(name: str, name_ar: str | None = None) -> dict | None:
    """
    Return the tag matching either locale's name, if any.
    """
    return await db.fetch_one(
        f"""
        SELECT {_TAG_COLUMNS}
        FROM tags t
        WHERE t.name = $1
           OR ($2::text IS NOT NULL AND t.name_ar = $2)
        ORDER BY t.created_at
        LIMIT 1
        """,
        name,
        name_ar or None,
    )


async def insert(*, tag_id: str, name: str, name_ar: str | None) -> dict | None:
    """
    Insert a tag. Returns None when a concurrent insert already claimed
    one of the names.
    """
    return await db.fetch_one(
        """
        INSERT INTO tags (id, name, name_ar)
        VALUES ($1, $2, $3)
        ON CONFLICT DO NOTHING
        RETURNING id, name, name_ar, created_at, updated_at
        """,
        tag_id,
        name,
        name_ar or None,
    )


async def list_all(*, search: str = "") -> list[dict]:
    q = (search or "").strip()
    return await db.fetch_all(
        f"""
        SELECT {_TAG_COLUMNS}
        FROM tags t
        WHERE $1 = ''
           OR t.name ILIKE ('%' || $1 || '%')
           OR t.name_ar ILIKE ('%' || $1 || '%')
        ORDER BY t.name ASC
        """,
        q,
    )


async def list_for_kind(kind: str) -> list[dict]:
    """
    Tags attached to at least one item of the given content kind.
    """
    table, _ = _link_table(kind)
    return await db.fetch_all(
        f"""
        SELECT {_TAG_COLUMNS}
        FROM tags t
        WHERE EXISTS (SELECT 1 FROM {table} l WHERE l.tag_id = t.id)
        ORDER BY t.name ASC
        """
    )


async def link_tags(kind: str, item_id: str, tag_ids: list[str]) -> None:
    """
    Attach tags to a content item in one transaction.
    """
    if not tag_ids:
        return
    table, column = _link_table(kind)
    records = [(item_id, tag_id, position) for position, tag_id in enumerate(tag_ids)]
    try:
        async with db.transaction() as conn:
            await conn.executemany(
                f"INSERT INTO {table} ({column}, tag_id, position) VALUES ($1, $2, $3)",
                records,
            )
    except asyncpg.UniqueViolationError as exc:
        raise DuplicateTag() from exc


async def tags_for_items(kind: str, item_ids: list[str]) -> dict[str, list[dict]]:
    """
    Load linked tags for many items at once, keyed by item id, in link order.
    """
    if not item_ids:
        return {}
    table, column = _link_table(kind)
    rows = await db.fetch_all(
        f"""
        SELECT l.{column} AS item_id, {_TAG_COLUMNS}
        FROM {table} l
        JOIN tags t ON t.id = l.tag_id
        WHERE l.{column} = ANY($1::text[])
        ORDER BY l.{column}, l.position
        """,
        item_ids,
    )
    grouped: dict[str, list[dict]] = {item_id: [] for item_id in item_ids}
    for row in rows:
        item_id = row.pop("item_id")
        grouped.setdefault(item_id, []).append(row)
    return grouped
