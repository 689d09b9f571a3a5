"""
Content creation workflow, shared by articles, tenders and announcements.

Flow:
1) Authorize the caller
2) Check upload fields hold real file uploads
3) Parse tag input (bad input aborts before anything is written)
4) Insert the bare item (no tags, no media)
5) Reconcile tags, then link the verified ids
6) Store + attach featured media (kinds that have one)
7) Store + attach the remaining uploads, skipping empty ones
8) Re-read the composed item

There is no database transaction across these steps. Every write after
step 4 records an undo action; if any later step fails, the undo actions run
in reverse order (stored files first, the item last) so no partially linked
item survives.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from types import ModuleType
from typing import Any, Awaitable, Callable, Mapping, Sequence
from uuid import uuid4

from fastapi import status

from auth.policy import Action, authorize, authorize_owner_or
from core import storage
from core.errors import ContentError, CreationFailed, DuplicateTag, ReferenceNotFound
from tags import repository as tags_repository
from tags.reconcile import parse_tag_ids, parse_tag_payload, reconcile_tags

from . import uploads as upload_handling
from .schemas import ContentStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentKind:
    """
    How the workflow reaches one content kind.

    `repository` must provide insert/find_by_id/delete/attach_files, plus
    set_featured_media when `featured_field` is set.
    """

    name: str
    label: str
    repository: ModuleType
    file_fields: tuple[str, ...]
    featured_field: str | None = None

    @property
    def upload_fields(self) -> tuple[str, ...]:
        if self.featured_field:
            return (self.featured_field, *self.file_fields)
        return self.file_fields


class CompensationLog:
    """
    Undo actions for one workflow run, replayed newest-first by unwind().
    """

    def __init__(self) -> None:
        self._steps: list[tuple[str, Callable[[], Awaitable[Any]]]] = []

    def record(self, description: str, undo: Callable[[], Awaitable[Any]]) -> None:
        self._steps.append((description, undo))

    def __len__(self) -> int:
        return len(self._steps)

    async def unwind(self) -> None:
        while self._steps:
            description, undo = self._steps.pop()
            try:
                await undo()
            except Exception:
                # Keep going: the item delete at the bottom matters most.
                logger.exception("compensation_failed step=%s", description)
            else:
                logger.info("compensated step=%s", description)


async def _store(upload: Any, log: CompensationLog) -> dict | None:
    descriptor = await upload_handling.store_upload(upload)
    if descriptor is not None:
        log.record(f"delete file {descriptor['path']}", partial(storage.delete_file, descriptor["path"]))
    return descriptor


async def _enrich(
    kind: ContentKind,
    item_id: str,
    *,
    tags: Sequence[Any],
    tag_ids: Sequence[str],
    uploads: Mapping[str, Sequence[Any]],
    log: CompensationLog,
) -> dict:
    verified = await reconcile_tags(list(tags), list(tag_ids))
    if verified:
        await tags_repository.link_tags(kind.name, item_id, [str(tag["id"]) for tag in verified])

    if kind.featured_field:
        for upload in uploads.get(kind.featured_field) or []:
            media = await _store(upload, log)
            if media is not None:
                await kind.repository.set_featured_media(item_id, media)
                break

    stored: dict[str, list[dict]] = {}
    for field in kind.file_fields:
        stored[field] = []
        for upload in uploads.get(field) or []:
            descriptor = await _store(upload, log)
            if descriptor is not None:
                stored[field].append(descriptor)
    if any(stored.values()):
        await kind.repository.attach_files(item_id, stored)

    composed = await kind.repository.find_by_id(item_id)
    if composed is None:
        raise ReferenceNotFound(item_id, kind=kind.label.capitalize())
    return composed


def _reported_as_is(exc: BaseException) -> bool:
    # Tag-link conflicts and oversized uploads keep their own status code.
    if isinstance(exc, DuplicateTag):
        return True
    return isinstance(exc, ContentError) and exc.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


async def create_content(
    kind: ContentKind,
    *,
    user: dict | None,
    fields: Mapping[str, Any],
    tags: Any = None,
    tag_ids: Any = None,
    uploads: Mapping[str, Sequence[Any]] | None = None,
) -> dict:
    """
    Create one content item with its tags and files, or nothing at all.
    """
    user = authorize(user, Action.CREATE_CONTENT)
    uploads = {field: list((uploads or {}).get(field) or []) for field in kind.upload_fields}
    upload_handling.validate_upload_fields(uploads)
    drafts = parse_tag_payload(tags)
    parsed_tag_ids = parse_tag_ids(tag_ids)

    now = datetime.now(timezone.utc)
    values: dict[str, Any] = {
        **fields,
        "id": str(uuid4()),
        "status": ContentStatus(fields.get("status") or ContentStatus.DRAFT).value,
        "author_id": str(user["id"]),
        "author_email": str(user["email"]),
        "created_at": now,
        "updated_at": now,
    }
    for field in kind.file_fields:
        values[field] = []
    if kind.featured_field:
        values[kind.featured_field] = None

    item = await kind.repository.insert(values)
    item_id = str(item["id"])
    log = CompensationLog()
    log.record(f"delete {kind.label} {item_id}", partial(kind.repository.delete, item_id))
    logger.info("content_created kind=%s id=%s author_id=%s", kind.name, item_id, user["id"])

    try:
        composed = await _enrich(kind, item_id, tags=drafts, tag_ids=parsed_tag_ids, uploads=uploads, log=log)
    except Exception as exc:
        logger.warning(
            "content_creation_rolled_back kind=%s id=%s steps=%s error=%s",
            kind.name,
            item_id,
            len(log),
            exc,
        )
        await log.unwind()
        if _reported_as_is(exc):
            raise
        raise CreationFailed(kind.label, exc) from exc

    logger.info("content_composed kind=%s id=%s tags=%s", kind.name, item_id, len(composed.get("tags") or []))
    return composed


def _stored_paths(item: Mapping[str, Any], fields: Sequence[str]) -> list[str]:
    paths: list[str] = []
    for field in fields:
        value = item.get(field)
        descriptors = value if isinstance(value, list) else [value]
        paths.extend(d["path"] for d in descriptors if d and d.get("path"))
    return paths


async def delete_content(kind: ContentKind, item_id: str, *, user: dict | None) -> dict:
    """
    Delete an item and its stored files. Authors may delete their own items.
    Returns the deleted row.
    """
    item = await kind.repository.find_by_id(item_id)
    if item is None:
        raise ReferenceNotFound(item_id, kind=kind.label.capitalize())
    authorize_owner_or(user, Action.DELETE_CONTENT, owner_id=item.get("author_id"))

    await kind.repository.delete(item_id)
    for path in _stored_paths(item, kind.upload_fields):
        await storage.delete_file(path)
    logger.info("content_deleted kind=%s id=%s", kind.name, item_id)
    return item
