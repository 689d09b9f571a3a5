"""
Announcement API endpoints.

Read failures of any kind surface as 500 on the listing and 400 on the
single-item lookup.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, Request, status

from auth import dependencies as auth_dependencies
from auth.policy import Action, authorize
from content import workflow
from content.forms import read_content_form
from content.localization import localize_announcement, resolve_language
from content.schemas import LocalizedAnnouncement
from core.errors import upstream_errors

from . import schemas, service

router = APIRouter(prefix="/announcements")


@router.get("")
async def list_announcements(
    accept_language: str | None = Header(default=None),
    search: str = Query(default="", max_length=200),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> dict:
    lang = resolve_language(accept_language)
    with upstream_errors():
        result = await service.list_published(page=page, limit=limit, search=search)
    return {
        "announcements": [localize_announcement(a, lang) for a in result["items"]],
        "total_count": result["total"],
        "page": result["page"],
        "limit": result["limit"],
        "total_pages": result["total_pages"],
    }


@router.get("/{announcement_id}", response_model=LocalizedAnnouncement)
async def get_announcement(
    announcement_id: str,
    accept_language: str | None = Header(default=None),
) -> LocalizedAnnouncement:
    with upstream_errors(status_code=status.HTTP_400_BAD_REQUEST):
        announcement = await service.get_published(announcement_id)
    return localize_announcement(announcement, resolve_language(accept_language))


@router.post("", response_model=LocalizedAnnouncement, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    request: Request,
    accept_language: str | None = Header(default=None),
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> LocalizedAnnouncement:
    authorize(current_user, Action.CREATE_CONTENT)
    form = await read_content_form(request, schemas.AnnouncementFields, service.ANNOUNCEMENT.upload_fields)
    with upstream_errors(status_code=status.HTTP_400_BAD_REQUEST):
        announcement = await workflow.create_content(
            service.ANNOUNCEMENT,
            user=current_user,
            fields=form.fields,
            tags=form.tags,
            tag_ids=form.tag_ids,
            uploads=form.uploads,
        )
    return localize_announcement(announcement, resolve_language(accept_language))


@router.delete("/{announcement_id}")
async def delete_announcement(
    announcement_id: str,
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> dict:
    await workflow.delete_content(service.ANNOUNCEMENT, announcement_id, user=current_user)
    return {"ok": True, "id": announcement_id}
