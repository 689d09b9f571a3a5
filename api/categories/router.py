"""
Category API endpoints.
"""

from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, Header, status

from auth import dependencies as auth_dependencies
from auth.policy import Action, authorize
from content.localization import localize_category, resolve_language
from content.schemas import LocalizedCategory
from core.errors import ValidationError

from . import repository, schemas

router = APIRouter(prefix="/categories")


@router.get("")
async def list_categories(accept_language: str | None = Header(default=None)) -> dict:
    lang = resolve_language(accept_language)
    rows = await repository.list_all()
    return {"categories": [localize_category(row, lang) for row in rows], "count": len(rows)}


@router.post("", response_model=LocalizedCategory, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: schemas.CategoryCreateRequest,
    accept_language: str | None = Header(default=None),
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> LocalizedCategory:
    authorize(current_user, Action.MANAGE_CATEGORIES)
    row = await repository.insert(
        category_id=str(uuid4()),
        name=payload.name.strip(),
        name_ar=(payload.name_ar or "").strip() or None,
    )
    if row is None:
        raise ValidationError(
            f"Category {payload.name!r} already exists.",
            status_code=status.HTTP_409_CONFLICT,
        )
    return localize_category(row, resolve_language(accept_language))
