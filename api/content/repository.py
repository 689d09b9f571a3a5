"""
Shared persistence for content kinds (articles, tenders, announcements).

Each kind describes its table once with a ContentTable; the kind's own
`repository.py` delegates here. Linked tags are loaded through
`tags.repository` and returned under the row's "tags" key.

Column and table names only ever come from ContentTable definitions in code;
user input is always passed as a $n parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core import db, pagination
from tags import repository as tags_repository

SORTABLE_COLUMNS = ("created_at", "updated_at", "title")


@dataclass(frozen=True)
class ContentTable:
    kind: str
    table: str
    columns: tuple[str, ...]
    search_columns: tuple[str, ...] = ("title", "title_ar")

    @property
    def select_list(self) -> str:
        return ", ".join(f"{self.table}.{c}" for c in self.columns)


class _Where:
    """
    Collects AND-ed conditions. Templates use {0}, {1}, ... for the
    values passed alongside them.
    """

    def __init__(self) -> None:
        self.conditions: list[str] = []
        self.params: list[Any] = []

    def add(self, template: str, *values: Any) -> "_Where":
        placeholders = []
        for value in values:
            self.params.append(value)
            placeholders.append(f"${len(self.params)}")
        self.conditions.append(template.format(*placeholders))
        return self

    def sql(self) -> str:
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(self.conditions)


async def _with_tags(table_def: ContentTable, rows: list[dict]) -> list[dict]:
    if not rows:
        return rows
    by_item = await tags_repository.tags_for_items(table_def.kind, [str(r["id"]) for r in rows])
    for row in rows:
        row["tags"] = by_item.get(str(row["id"]), [])
    return rows


def _filters(
    table_def: ContentTable,
    *,
    status: str | None = None,
    search: str = "",
    tag_id: str | None = None,
    equals: dict[str, Any] | None = None,
) -> _Where:
    where = _Where()
    if status:
        where.add(f"{table_def.table}.status = {{0}}", status)
    q = (search or "").strip()
    if q:
        clauses = " OR ".join(f"{table_def.table}.{c} ILIKE ('%' || {{0}} || '%')" for c in table_def.search_columns)
        where.add(f"({clauses})", q)
    if tag_id:
        link_table, column = tags_repository.LINK_TABLES[table_def.kind]
        where.add(
            f"EXISTS (SELECT 1 FROM {link_table} l WHERE l.{column} = {table_def.table}.id AND l.tag_id = {{0}})",
            tag_id,
        )
    for column, value in (equals or {}).items():
        if value is not None:
            where.add(f"{table_def.table}.{column} = {{0}}", value)
    return where


def _order_by(table_def: ContentTable, sort_by: str | None, sort_order: str | None) -> str:
    column = sort_by if sort_by in SORTABLE_COLUMNS else "created_at"
    direction = "ASC" if (sort_order or "").lower() == "asc" else "DESC"
    return f"ORDER BY {table_def.table}.{column} {direction}, {table_def.table}.id {direction}"


async def insert(table_def: ContentTable, values: dict[str, Any]) -> dict:
    columns = [c for c in table_def.columns if c in values]
    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
    row = await db.fetch_one(
        f"""
        INSERT INTO {table_def.table} ({", ".join(columns)})
        VALUES ({placeholders})
        RETURNING {", ".join(table_def.columns)}
        """,
        *(values[c] for c in columns),
    )
    if row is None:
        raise RuntimeError(f"Failed to insert into {table_def.table}.")
    row["tags"] = []
    return row


async def find_by_id(table_def: ContentTable, item_id: str) -> dict | None:
    row = await db.fetch_one(
        f"SELECT {table_def.select_list} FROM {table_def.table} WHERE {table_def.table}.id = $1",
        item_id,
    )
    if row is None:
        return None
    return (await _with_tags(table_def, [row]))[0]


async def list_page(
    table_def: ContentTable,
    *,
    page: int,
    limit: int,
    status: str | None = None,
    search: str = "",
    tag_id: str | None = None,
    equals: dict[str, Any] | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> dict[str, Any]:
    """
    Returns {"items", "total", "page", "limit", "total_pages"}.
    """
    where = _filters(table_def, status=status, search=search, tag_id=tag_id, equals=equals)
    total = await db.fetch_value(f"SELECT count(*) FROM {table_def.table} {where.sql()}", *where.params)

    offset = (page - 1) * limit
    n = len(where.params)
    rows = await db.fetch_all(
        f"""
        SELECT {table_def.select_list}
        FROM {table_def.table}
        {where.sql()}
        {_order_by(table_def, sort_by, sort_order)}
        LIMIT ${n + 1}
        OFFSET ${n + 2}
        """,
        *where.params,
        limit,
        offset,
    )
    items = await _with_tags(table_def, rows)
    return {"items": items, **pagination.metadata(total=int(total or 0), page=page, limit=limit)}


async def list_all(table_def: ContentTable, *, status: str | None = None) -> list[dict]:
    where = _filters(table_def, status=status)
    rows = await db.fetch_all(
        f"SELECT {table_def.select_list} FROM {table_def.table} {where.sql()} {_order_by(table_def, None, 'desc')}",
        *where.params,
    )
    return await _with_tags(table_def, rows)


async def append_files(table_def: ContentTable, item_id: str, files_by_field: dict[str, list[dict]]) -> None:
    """
    Append file descriptors to the kind's jsonb list columns, keeping order.
    """
    fields = [f for f, files in files_by_field.items() if files]
    if not fields:
        return
    unknown = [f for f in fields if f not in table_def.columns]
    if unknown:
        raise ValueError(f"{table_def.table} has no file columns {unknown!r}")
    assignments = ", ".join(f"{f} = {f} || ${i}::jsonb" for i, f in enumerate(fields, start=2))
    await db.execute(
        f"UPDATE {table_def.table} SET {assignments}, updated_at = now() WHERE id = $1",
        item_id,
        *(files_by_field[f] for f in fields),
    )


async def set_value(table_def: ContentTable, item_id: str, column: str, value: Any) -> None:
    if column not in table_def.columns:
        raise ValueError(f"{table_def.table} has no column {column!r}")
    await db.execute(
        f"UPDATE {table_def.table} SET {column} = $2, updated_at = now() WHERE id = $1",
        item_id,
        value,
    )


async def delete(table_def: ContentTable, item_id: str) -> bool:
    status = await db.execute(f"DELETE FROM {table_def.table} WHERE id = $1", item_id)
    return db.affected_rows(status) > 0
