"""
Exchange-rate persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def list_all() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT currency, rate, base_currency, updated_at
        FROM exchange_rates
        ORDER BY currency ASC
        """
    )


async def upsert(*, currency: str, rate: float, base_currency: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO exchange_rates (currency, rate, base_currency)
        VALUES ($1, $2, $3)
        ON CONFLICT (currency) DO UPDATE
        SET rate = EXCLUDED.rate,
            base_currency = EXCLUDED.base_currency,
            updated_at = now()
        RETURNING currency, rate, base_currency, updated_at
        """,
        currency,
        rate,
        base_currency,
    )
    if row is None:
        raise RuntimeError("Failed to upsert exchange rate.")
    return row
