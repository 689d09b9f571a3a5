"""
Tag business logic.
"""

from __future__ import annotations

import logging
from uuid import uuid4

from core.errors import ReferenceNotFound, UpstreamFailure, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)


def to_tag_response(tag: dict) -> schemas.TagResponse:
    return schemas.TagResponse(
        id=str(tag["id"]),
        name=str(tag["name"]),
        name_ar=str(tag.get("name_ar") or tag["name"]),
        created_at=tag["created_at"],
        updated_at=tag["updated_at"],
    )


async def create_tag(draft: schemas.TagDraft) -> dict:
    """
    Idempotent create: a tag whose name (or Arabic name) already exists is
    returned as-is instead of being inserted again.

    Always returns the stored record, never the draft.
    """
    name = (draft.name or "").strip()
    name_ar = (draft.name_ar or "").strip() or None
    if not name:
        raise ValidationError("Each tag must have a name")

    existing = await repository.find_by_name(name, name_ar)
    if existing is not None:
        return existing

    created = await repository.insert(tag_id=str(uuid4()), name=name, name_ar=name_ar)
    if created is not None:
        logger.info("tag_created id=%s name=%s", created["id"], name)
        return created

    # A concurrent request inserted the same name between our read and write.
    winner = await repository.find_by_name(name, name_ar)
    if winner is None:
        raise UpstreamFailure("Failed to create tag")
    return winner


async def get_tag(tag_id: str) -> dict:
    tag = await repository.find_by_id(tag_id)
    if tag is None:
        raise ReferenceNotFound(tag_id)
    return tag


async def list_tags(*, search: str = "") -> list[dict]:
    return await repository.list_all(search=search)
