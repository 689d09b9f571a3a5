"""
Category request schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    name_ar: str | None = Field(default=None, max_length=120)
