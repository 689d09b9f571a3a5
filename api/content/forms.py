"""
Read a multipart content-creation request.

Text fields are validated with the kind's pydantic model. Upload and tag-id
fields are collected under every accepted spelling (`images`, `images[]`,
`featuredMedia`, `tagIds`, ...). Uploads stay raw so the workflow can reject
values that are plain strings instead of files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError

TAG_FIELDS = ("tags", "tag_ids")

# Client spellings accepted for the same form field.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "featured_media": ("featuredMedia",),
    "tag_ids": ("tagIds",),
}


@dataclass
class ContentForm:
    fields: dict[str, Any]
    tags: Any = None
    tag_ids: Any = None
    uploads: dict[str, list[Any]] = field(default_factory=dict)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid form data"


def _spellings(name: str) -> list[str]:
    names = (name, *FIELD_ALIASES.get(name, ()))
    return [spelling for base in names for spelling in (base, f"{base}[]")]


async def read_content_form(
    request: Request,
    model: type[BaseModel],
    upload_fields: Sequence[str],
) -> ContentForm:
    form = await request.form()

    uploads = {name: [v for s in _spellings(name) for v in form.getlist(s)] for name in upload_fields}
    skip = {s for name in (*upload_fields, *TAG_FIELDS) for s in _spellings(name)}
    text = {key: value for key, value in form.multi_items() if key not in skip and isinstance(value, str)}

    try:
        parsed = model.model_validate(text)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc

    tag_ids = [v for s in _spellings("tag_ids") for v in form.getlist(s)]
    return ContentForm(
        fields=parsed.model_dump(exclude_none=True),
        tags=form.get("tags"),
        tag_ids=tag_ids[0] if len(tag_ids) == 1 else (tag_ids or None),
        uploads=uploads,
    )
