"""
Tag reconciliation: turn the caller's tag references into a verified list of
stored tags before anything is linked to a content item.

Input comes in two fields:
- `tags`: new tag descriptions, as a JSON array, a single JSON object, or a
  bare comma-joined run of objects without the enclosing brackets.
- `tag_ids`: ids of existing tags, as a list or a comma-separated string.

Reconciliation runs in three strictly sequential phases; the calls inside a
phase run concurrently:
1) fetch every referenced id (missing -> ReferenceNotFound)
2) create every new tag through the idempotent create, keeping the record
   the store returned
3) re-fetch every resulting id right before linking

Phase 3 exists because a just-created row is only guaranteed visible to a
later read once the create has returned. Linking against ids that were read
back guarantees the item never references a missing tag.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from core.errors import MalformedInput, ReferenceNotFound, ValidationError

from . import repository, service
from .schemas import TagDraft


def _decode_json(raw: str) -> Any:
    return json.loads(raw)


def _decode_bracketless(raw: str) -> Any:
    return json.loads(f"[{raw}]")


# Tried in order; the first decoder that succeeds wins.
_DECODERS: tuple[Callable[[str], Any], ...] = (_decode_json, _decode_bracketless)


def _decode(raw: str, *, field: str) -> Any:
    for decoder in _DECODERS:
        try:
            return decoder(raw)
        except json.JSONDecodeError:
            continue
    raise MalformedInput(field)


def _to_draft(entry: Any) -> TagDraft:
    if not isinstance(entry, dict) or not str(entry.get("name") or "").strip():
        raise ValidationError("Each tag must have a name")

    name_ar = entry.get("name_ar", entry.get("nameAr"))
    try:
        return TagDraft(
            name=str(entry["name"]).strip(),
            name_ar=(str(name_ar).strip() or None) if name_ar is not None else None,
        )
    except PydanticValidationError as exc:
        reason = exc.errors()[0].get("msg", "invalid value")
        raise ValidationError(f"Invalid tag {entry['name']!r}: {reason}") from exc


def parse_tag_payload(raw: Any, *, field: str = "tags") -> list[TagDraft]:
    if raw is None:
        return []
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        if not raw.strip():
            return []
        raw = _decode(raw.strip(), field=field)

    entries = raw if isinstance(raw, list) else [raw]
    return [_to_draft(entry) for entry in entries]


def parse_tag_ids(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        parts = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        parts = [str(part) for part in raw]
    else:
        raise MalformedInput("tag_ids", "tag_ids must be a list or a comma-separated string")
    return [part.strip() for part in parts if part.strip()]


async def _require_tag(tag_id: str) -> dict:
    tag = await repository.find_by_id(tag_id)
    if tag is None:
        raise ReferenceNotFound(tag_id)
    return tag


def _unique_by_id(tags: list[dict]) -> list[dict]:
    seen: set[str] = set()
    unique: list[dict] = []
    for tag in tags:
        tag_id = str(tag["id"])
        if tag_id in seen:
            continue
        seen.add(tag_id)
        unique.append(tag)
    return unique


async def reconcile_tags(drafts: list[TagDraft], tag_ids: list[str]) -> list[dict]:
    """
    Return the verified, de-duplicated tag records for `tag_ids` + `drafts`.
    """
    existing = await asyncio.gather(*(_require_tag(tag_id) for tag_id in tag_ids))
    created = await asyncio.gather(*(service.create_tag(draft) for draft in drafts))

    candidates = _unique_by_id([*existing, *created])
    verified = await asyncio.gather(*(_require_tag(str(tag["id"])) for tag in candidates))
    return list(verified)
