"""
Tag schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class TagDraft(BaseModel):
    """
    A tag described by the caller that may or may not exist yet.
    """

    name: str = Field(..., min_length=1, max_length=100)
    name_ar: str | None = Field(default=None, max_length=100)


class TagCreateRequest(TagDraft):
    pass


class TagResponse(BaseModel):
    id: str
    name: str
    name_ar: str
    created_at: datetime
    updated_at: datetime


class TagSummary(BaseModel):
    id: str
    name: str
    name_ar: str
