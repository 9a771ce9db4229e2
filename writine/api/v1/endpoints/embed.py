"""
Public Embed API

Unauthenticated JSON feed of a tenant's published posts, for embedding a
blog on third-party sites. CORS is open to every origin.

  GET /api/embed/{handle}?limit=10&offset=0   published posts, newest first
  GET /api/embed/{handle}?slug=my-post        one published post

Unknown handle and unknown / unpublished slug give the same 404 body.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from writine.api import deps
from writine.models.tenant import Tenant
from writine.schemas.embed import (
    EmbedAuthor,
    EmbedListResponse,
    EmbedPagination,
    EmbedPost,
    EmbedPostResponse,
    EmbedPostSummary,
)
from writine.services.content_resolver import TenantContentResolver

router = APIRouter()
logger = logging.getLogger("writine.embed")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _not_found() -> JSONResponse:
    return JSONResponse({"error": "Not found"}, status_code=404, headers=CORS_HEADERS)


def _author(tenant: Tenant) -> EmbedAuthor:
    return EmbedAuthor(
        name=tenant.display_name,
        handle=tenant.handle,
        avatar=tenant.avatar_url,
        bio=tenant.bio,
    )


@router.get("/{handle}")
def get_embed(
    handle: str,
    slug: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(deps.get_db),
) -> Response:
    resolver = TenantContentResolver(db)
    tenant = resolver.resolve_owner_by_handle(handle)
    if tenant is None:
        return _not_found()

    if slug:
        post = resolver.get_published_content_by_slug(tenant.id, slug)
        if post is None:
            return _not_found()
        body = EmbedPostResponse(author=_author(tenant), post=EmbedPost.model_validate(post))
        return JSONResponse(body.model_dump(mode="json"), headers=CORS_HEADERS)

    total = resolver.count_published_content(tenant.id)
    posts = resolver.list_published_content(tenant.id, limit=limit, offset=offset)
    body = EmbedListResponse(
        author=_author(tenant),
        posts=[EmbedPostSummary.model_validate(p) for p in posts],
        pagination=EmbedPagination(
            total=total,
            limit=limit,
            offset=offset,
            has_more=total > offset + limit,
        ),
    )
    return JSONResponse(body.model_dump(mode="json"), headers=CORS_HEADERS)


@router.options("/{handle}")
def embed_preflight(handle: str) -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)
