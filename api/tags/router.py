"""
Tag API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from auth.policy import Action, authorize

from . import schemas, service

router = APIRouter(prefix="/tags")


@router.get("")
async def list_tags(search: str = Query(default="", max_length=100)) -> dict:
    rows = await service.list_tags(search=search)
    return {"tags": [service.to_tag_response(row) for row in rows], "count": len(rows)}


@router.get("/{tag_id}", response_model=schemas.TagResponse)
async def get_tag(tag_id: str) -> schemas.TagResponse:
    return service.to_tag_response(await service.get_tag(tag_id))


@router.post("", response_model=schemas.TagResponse)
async def create_tag(
    payload: schemas.TagCreateRequest,
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> schemas.TagResponse:
    """
    Create a tag, or return the existing one with the same name.
    """
    authorize(current_user, Action.MANAGE_TAGS)
    return service.to_tag_response(await service.create_tag(payload))
