"""
Local-disk file uploader.

Stored objects are written under UPLOAD_DIR as `<uuid><ext>` and served by the
app at PUBLIC_FILES_URL (see `api/main.py`). Callers only ever see the
StoredObject returned here; file descriptors are built from it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from . import config

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    pass


@dataclass(frozen=True)
class StoredObject:
    id: str
    url: str
    path: str


def _safe_suffix(filename: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    # Keep only short alphanumeric extensions; everything else is dropped.
    if len(suffix) > 10 or not suffix[1:].isalnum():
        return ""
    return suffix


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def upload_file(data: bytes, original_filename: str, mimetype: str | None) -> StoredObject:
    if not data:
        raise StorageError("Refusing to store an empty file.")

    object_id = str(uuid4())
    name = f"{object_id}{_safe_suffix(original_filename)}"
    path = config.upload_dir() / name

    try:
        await asyncio.to_thread(_write, path, data)
    except OSError as exc:
        raise StorageError(f"Could not store {original_filename!r}: {exc}") from exc

    logger.info(
        "file_stored id=%s filename=%s mimetype=%s size=%s",
        object_id,
        original_filename,
        mimetype,
        len(data),
    )
    return StoredObject(id=object_id, url=f"{config.public_files_url()}/{name}", path=str(path))


async def delete_file(path: str) -> bool:
    target = Path(path)
    try:
        await asyncio.to_thread(target.unlink)
    except FileNotFoundError:
        return False
    return True
