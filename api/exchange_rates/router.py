"""
Exchange-rate API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from auth import dependencies as auth_dependencies
from auth.policy import Action, authorize

from . import repository, schemas

router = APIRouter(prefix="/exchange-rates")


@router.get("")
async def list_exchange_rates() -> dict:
    rows = await repository.list_all()
    return {"exchange_rates": [schemas.ExchangeRate(**row) for row in rows], "count": len(rows)}


@router.put("/{currency}", response_model=schemas.ExchangeRate)
async def set_exchange_rate(
    payload: schemas.ExchangeRateUpdate,
    currency: str = Path(..., min_length=3, max_length=3),
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> schemas.ExchangeRate:
    authorize(current_user, Action.MANAGE_EXCHANGE_RATES)
    row = await repository.upsert(
        currency=currency.upper(),
        rate=payload.rate,
        base_currency=payload.base_currency.upper(),
    )
    return schemas.ExchangeRate(**row)
