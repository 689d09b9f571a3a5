"""
Multipart upload handling for content creation.

- Validate that upload fields hold real file uploads, not plain form strings
- Read each upload with a size limit
- Store it through `core.storage` and build the file descriptor
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from fastapi import status
from starlette.datastructures import UploadFile

from core import config, storage
from core.errors import ValidationError

_READ_CHUNK_BYTES = 1024 * 1024  # 1 MiB


def validate_upload_fields(uploads: Mapping[str, Sequence[Any]]) -> None:
    for field, values in uploads.items():
        for value in values or []:
            if not isinstance(value, UploadFile):
                raise ValidationError(f"{field} must be file uploads, not strings")


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    buf = bytearray()
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise ValidationError(
                f"File {file.filename!r} is too large. Max is {max_bytes} bytes.",
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
    return bytes(buf)


async def store_upload(file: UploadFile) -> dict | None:
    """
    Store one upload and return its file descriptor, or None when the upload
    has no body.
    """
    data = await read_upload_bytes(file, config.max_upload_bytes())
    if not data:
        return None

    filename = file.filename or ""
    mimetype = file.content_type or "application/octet-stream"
    stored = await storage.upload_file(data, filename, mimetype)
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": stored.id,
        "url": stored.url,
        "path": stored.path or "",
        "filename": filename,
        "mimetype": mimetype,
        "size": len(data),
        "created_at": now,
        "updated_at": now,
    }
