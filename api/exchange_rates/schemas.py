"""
Exchange-rate schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ExchangeRate(BaseModel):
    currency: str
    rate: float
    base_currency: str
    updated_at: datetime


class ExchangeRateUpdate(BaseModel):
    rate: float = Field(..., gt=0)
    base_currency: str = Field(default="USD", min_length=3, max_length=3)
