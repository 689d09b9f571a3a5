"""
Tender request schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from content.schemas import ContentStatus


class TenderFields(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=300)
    title_ar: str | None = Field(default=None, max_length=300)
    description: str = Field(..., min_length=1)
    description_ar: str | None = None
    reference_number: str | None = Field(default=None, max_length=100)
    deadline: datetime | None = None
    status: ContentStatus = ContentStatus.DRAFT
