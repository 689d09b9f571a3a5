"""
Tender API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, Request, status

from auth import dependencies as auth_dependencies
from auth.policy import Action, authorize
from content import workflow
from content.forms import read_content_form
from content.localization import localize_tender, resolve_language
from content.schemas import LocalizedTender
from core.errors import ValidationError, upstream_errors

from . import repository, schemas, service

router = APIRouter(prefix="/tenders")


@router.get("")
async def list_tenders(
    accept_language: str | None = Header(default=None),
    search: str = Query(default="", max_length=200),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> dict:
    lang = resolve_language(accept_language)
    with upstream_errors():
        result = await service.list_published(page=page, limit=limit, search=search)
    return {
        "tenders": [localize_tender(t, lang) for t in result["items"]],
        "total_count": result["total"],
        "page": result["page"],
        "limit": result["limit"],
        "total_pages": result["total_pages"],
    }


@router.get("/{tender_id}", response_model=LocalizedTender)
async def get_tender(
    tender_id: str,
    accept_language: str | None = Header(default=None),
) -> LocalizedTender:
    with upstream_errors(status_code=status.HTTP_400_BAD_REQUEST):
        tender = await repository.find_by_id(tender_id)
    if tender is None or tender.get("status") != "published":
        raise ValidationError("Tender not found or not published")
    return localize_tender(tender, resolve_language(accept_language))


@router.post("", response_model=LocalizedTender, status_code=status.HTTP_201_CREATED)
async def create_tender(
    request: Request,
    accept_language: str | None = Header(default=None),
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> LocalizedTender:
    authorize(current_user, Action.CREATE_CONTENT)
    form = await read_content_form(request, schemas.TenderFields, service.TENDER.upload_fields)
    with upstream_errors(status_code=status.HTTP_400_BAD_REQUEST):
        tender = await workflow.create_content(
            service.TENDER,
            user=current_user,
            fields=form.fields,
            tags=form.tags,
            tag_ids=form.tag_ids,
            uploads=form.uploads,
        )
    return localize_tender(tender, resolve_language(accept_language))


@router.delete("/{tender_id}")
async def delete_tender(
    tender_id: str,
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> dict:
    await workflow.delete_content(service.TENDER, tender_id, user=current_user)
    return {"ok": True, "id": tender_id}
