"""
Article API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, Request, status

from auth import dependencies as auth_dependencies
from auth.policy import Action, authorize
from content import workflow
from content.forms import read_content_form
from content.localization import localize_article, resolve_language
from content.schemas import LocalizedArticle
from core.errors import ValidationError, upstream_errors

from . import repository, schemas, service

router = APIRouter(prefix="/articles")


@router.get("")
async def list_articles(
    accept_language: str | None = Header(default=None),
    search: str = Query(default="", max_length=200),
    category_id: str | None = Query(default=None),
    tag_id: str | None = Query(default=None),
    sort_by: str = Query(default="created_at", pattern="^(created_at|updated_at|title)$"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> dict:
    """
    Published articles in the caller's language.
    """
    lang = resolve_language(accept_language)
    with upstream_errors():
        result = await service.list_published(
            page=page,
            limit=limit,
            search=search,
            category_id=category_id,
            tag_id=tag_id,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    return {
        "articles": [localize_article(a, lang) for a in result["items"]],
        "total_count": result["total"],
        "page": result["page"],
        "limit": result["limit"],
        "total_pages": result["total_pages"],
    }


@router.get("/{article_id}", response_model=LocalizedArticle)
async def get_article(
    article_id: str,
    accept_language: str | None = Header(default=None),
) -> LocalizedArticle:
    with upstream_errors(status_code=status.HTTP_400_BAD_REQUEST):
        article = await repository.find_by_id(article_id)
    if article is None or article.get("status") != "published":
        raise ValidationError("Article not found or not published")
    return localize_article(article, resolve_language(accept_language))


@router.post("", response_model=LocalizedArticle, status_code=status.HTTP_201_CREATED)
async def create_article(
    request: Request,
    accept_language: str | None = Header(default=None),
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> LocalizedArticle:
    """
    Multipart create: text fields, `tags` / `tag_ids`, and uploads under
    `featured_media`, `images`, `videos`.
    """
    authorize(current_user, Action.CREATE_CONTENT)
    form = await read_content_form(request, schemas.ArticleFields, service.ARTICLE.upload_fields)
    with upstream_errors(status_code=status.HTTP_400_BAD_REQUEST):
        article = await service.create_article(
            user=current_user,
            fields=form.fields,
            tags=form.tags,
            tag_ids=form.tag_ids,
            uploads=form.uploads,
        )
    return localize_article(article, resolve_language(accept_language))


@router.delete("/{article_id}")
async def delete_article(
    article_id: str,
    current_user: dict | None = Depends(auth_dependencies.get_optional_user),
) -> dict:
    await workflow.delete_content(service.ARTICLE, article_id, user=current_user)
    return {"ok": True, "id": article_id}
