"""
Category persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def list_all() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, name_ar, created_at, updated_at
        FROM categories
        ORDER BY name ASC
        """
    )


async def find_by_id(category_id: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, name_ar, created_at, updated_at
        FROM categories
        WHERE id = $1
        """,
        category_id,
    )


async def insert(*, category_id: str, name: str, name_ar: str | None) -> dict | None:
    """
    Returns None when a category with the same name already exists.
    """
    return await db.fetch_one(
        """
        INSERT INTO categories (id, name, name_ar)
        VALUES ($1, $2, $3)
        ON CONFLICT (name) DO NOTHING
        RETURNING id, name, name_ar, created_at, updated_at
        """,
        category_id,
        name,
        name_ar,
    )
