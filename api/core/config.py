"""
Environment-driven settings.

Every setting is a small function so tests can change the environment with
`monkeypatch.setenv` without reloading modules.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB


def env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    return env_list("CORS_ORIGINS", ["http://localhost:3000", "http://127.0.0.1:3000"])


def default_page_size() -> int:
    return max(1, env_int("DEFAULT_PAGE_SIZE", 10))


def max_page_size() -> int:
    return max(1, env_int("MAX_PAGE_SIZE", 100))


def upload_dir() -> Path:
    return Path(env_str("UPLOAD_DIR", "./uploads"))


def public_files_url() -> str:
    return env_str("PUBLIC_FILES_URL", "/files").rstrip("/")


def max_upload_bytes() -> int:
    value = env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    return value if value > 0 else DEFAULT_MAX_UPLOAD_BYTES
