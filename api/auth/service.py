"""
Auth business logic.
"""

from __future__ import annotations

from fastapi import status

from core.errors import Forbidden, Unauthorized, ValidationError

from . import repository, schemas, security
from .policy import Role, parse_role


def to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=str(user_row["id"]),
        email=str(user_row["email"]),
        role=str(user_row["role"]),
        is_active=bool(user_row["is_active"]),
        created_at=user_row["created_at"],
    )


def _issue_token(user_row: dict) -> schemas.TokenResponse:
    token = security.build_access_token(
        user_id=str(user_row["id"]),
        email=str(user_row["email"]),
        role=str(user_row["role"]),
    )
    return schemas.TokenResponse(access_token=token)


async def register(payload: schemas.RegisterRequest) -> schemas.AuthResponse:
    existing = await repository.get_user_by_email(payload.email)
    if existing is not None:
        raise ValidationError("Email is already registered.", status_code=status.HTTP_409_CONFLICT)

    # Self-registered accounts can read but not publish; roles are granted by an admin.
    user_row = await repository.create_user(
        email=payload.email,
        password_hash=security.hash_password(payload.password),
        role=Role.VIEWER.value,
    )
    return schemas.AuthResponse(user=to_user_response(user_row), tokens=_issue_token(user_row))


async def login(payload: schemas.LoginRequest) -> schemas.AuthResponse:
    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None:
        raise Unauthorized("Invalid email or password.")

    if not bool(user_row.get("is_active", False)):
        raise Forbidden("User is inactive.")

    if not security.verify_password(payload.password, str(user_row.get("password_hash") or "")):
        raise Unauthorized("Invalid email or password.")

    return schemas.AuthResponse(user=to_user_response(user_row), tokens=_issue_token(user_row))


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise Unauthorized(str(exc)) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise Unauthorized("Invalid access token subject.")

    user_row = await repository.get_user_by_id(subject)
    if user_row is None:
        raise Unauthorized("User not found.")
    if not bool(user_row.get("is_active", False)):
        raise Forbidden("User is inactive.")
    if parse_role(user_row.get("role")) is None:
        raise Forbidden("User has no valid role.")
    return user_row
