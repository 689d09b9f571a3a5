"""
Single-language response models shared by the content kinds.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from exchange_rates.schemas import ExchangeRate
from tags.schemas import TagSummary


class ContentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class FileDescriptor(BaseModel):
    id: str
    url: str
    filename: str
    mimetype: str
    size: int
    path: str
    created_at: datetime
    updated_at: datetime


class LocalizedArticle(BaseModel):
    id: str
    title: str
    content: str
    summary: str
    status: str
    category_id: str | None = None
    author_id: str
    author_email: str
    featured_media: FileDescriptor | None = None
    images: list[FileDescriptor] = Field(default_factory=list)
    videos: list[FileDescriptor] = Field(default_factory=list)
    tags: list[TagSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class LocalizedTender(BaseModel):
    id: str
    title: str
    description: str
    reference_number: str
    deadline: datetime | None = None
    status: str
    files: list[FileDescriptor] = Field(default_factory=list)
    author_id: str
    author_email: str
    tags: list[TagSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class LocalizedAnnouncement(BaseModel):
    id: str
    title: str
    description: str
    scope_of_work: str
    date: datetime
    status: str
    files: list[FileDescriptor] = Field(default_factory=list)
    author_id: str
    author_email: str
    reference_number: str
    tags: list[TagSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class LocalizedCategory(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class PaginationMetadata(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class UnifiedContentResponse(BaseModel):
    """
    One item list per requested kind, plus paging metadata keyed the same way.
    Kinds that were not requested (or not recognized) are absent.
    """

    metadata: dict[str, PaginationMetadata] = Field(default_factory=dict)
    articles: list[LocalizedArticle] | None = None
    categories: list[LocalizedCategory] | None = None
    tags: list[TagSummary] | None = None
    tenders: list[LocalizedTender] | None = None
    announcements: list[LocalizedAnnouncement] | None = None
    exchange_rates: list[ExchangeRate] | None = None
    article_tags: list[TagSummary] | None = None
    tender_tags: list[TagSummary] | None = None
    announcement_tags: list[TagSummary] | None = None
