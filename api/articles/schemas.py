"""
Article request schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from content.schemas import ContentStatus


class ArticleFields(BaseModel):
    """
    Text fields of the multipart create form.
    """

    model_config = ConfigDict(use_enum_values=True, validate_default=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=300)
    title_ar: str | None = Field(default=None, max_length=300)
    content: str = Field(..., min_length=1)
    content_ar: str | None = None
    summary: str | None = Field(default=None, max_length=1000)
    summary_ar: str | None = Field(default=None, max_length=1000)
    category_id: str | None = None
    status: ContentStatus = ContentStatus.DRAFT
