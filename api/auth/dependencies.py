"""
Auth dependencies for FastAPI routes.

`get_current_user` rejects anonymous callers outright; `get_optional_user`
lets the route's policy check decide (it raises Unauthorized for None).
"""

from __future__ import annotations

from fastapi import Depends, Header

from core.errors import Unauthorized

from . import service


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise Unauthorized("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise Unauthorized("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise Unauthorized("Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(access_token: str = Depends(get_bearer_token)) -> dict:
    return await service.get_user_from_access_token(access_token)


async def get_optional_user(authorization: str | None = Header(default=None)) -> dict | None:
    if not (authorization or "").strip():
        return None
    return await service.get_user_from_access_token(_extract_bearer_token(authorization))
