"""
Tenant render surfaces.

The routing middleware rewrites tenant hosts onto these paths:

  /u/{handle}[/{slug}]      reserved subdomain  ({handle}.writine.com)
  /d/{hostname}[/{slug}]    custom domain       (verified claims only)

Each surface resolves the owner through TenantContentResolver. Any miss,
including an unverified custom domain, renders the same generic 404 page,
which echoes nothing from the request.
"""
import logging
from math import ceil
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from writine.api import deps
from writine.config import settings
from writine.models.tenant import Tenant
from writine.services.content_resolver import TenantContentResolver

router = APIRouter(include_in_schema=False)
logger = logging.getLogger("writine.content")

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def render_not_found(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "not_found.html",
        {"marketing_url": settings.MARKETING_SITE_URL},
        status_code=404,
    )


def _link_base(request: Request, surface_root: str) -> str:
    """Post links are host-relative when the request came in on a tenant host."""
    decision = getattr(request.state, "routing", None)
    if decision is not None and decision.rewritten:
        return ""
    return surface_root


def _render_blog(
    request: Request,
    resolver: TenantContentResolver,
    tenant: Optional[Tenant],
    slug: Optional[str],
    page: int,
    surface_root: str,
) -> HTMLResponse:
    if tenant is None:
        return render_not_found(request)

    context = {
        "author_name": tenant.author_name,
        "tenant": tenant,
        "show_branding": not resolver.is_entitled(tenant.id),
        "marketing_url": settings.MARKETING_SITE_URL,
        "link_base": _link_base(request, surface_root),
    }

    if slug:
        post = resolver.get_published_content_by_slug(tenant.id, slug)
        if post is None:
            return render_not_found(request)
        context.update(
            post=post,
            page_title=post.title,
            page_description=post.excerpt or post.meta_description or f"Read {post.title}",
            og_image=post.cover_image,
        )
        return templates.TemplateResponse(request, "blog_post.html", context)

    page_size = settings.BLOG_PAGE_SIZE
    total = resolver.count_published_content(tenant.id)
    pages = max(1, ceil(total / page_size))
    page = min(max(1, page), pages)
    posts = resolver.list_published_content(tenant.id, limit=page_size, offset=(page - 1) * page_size)
    context.update(
        posts=posts,
        total=total,
        page=page,
        pages=pages,
        page_title=f"{tenant.author_name}'s Blog",
        page_description=tenant.bio or f"Blog posts by {tenant.author_name}",
        og_image=None,
    )
    return templates.TemplateResponse(request, "blog_index.html", context)


# ── Reserved subdomain surface ──

@router.get("/u/{handle}", response_class=HTMLResponse)
def subdomain_index(request: Request, handle: str, page: int = 1, db: Session = Depends(deps.get_db)):
    resolver = TenantContentResolver(db)
    tenant = resolver.resolve_owner_by_handle(handle)
    return _render_blog(request, resolver, tenant, None, page, f"/u/{handle}")


@router.get("/u/{handle}/{slug}", response_class=HTMLResponse)
def subdomain_post(request: Request, handle: str, slug: str, db: Session = Depends(deps.get_db)):
    resolver = TenantContentResolver(db)
    tenant = resolver.resolve_owner_by_handle(handle)
    return _render_blog(request, resolver, tenant, slug, 1, f"/u/{handle}")


# ── Custom domain surface ──

@router.get("/d/{hostname}", response_class=HTMLResponse)
def custom_domain_index(request: Request, hostname: str, page: int = 1, db: Session = Depends(deps.get_db)):
    resolver = TenantContentResolver(db)
    tenant = resolver.resolve_owner_by_verified_domain(hostname)
    return _render_blog(request, resolver, tenant, None, page, f"/d/{hostname}")


@router.get("/d/{hostname}/{slug}", response_class=HTMLResponse)
def custom_domain_post(request: Request, hostname: str, slug: str, db: Session = Depends(deps.get_db)):
    resolver = TenantContentResolver(db)
    tenant = resolver.resolve_owner_by_verified_domain(hostname)
    return _render_blog(request, resolver, tenant, slug, 1, f"/d/{hostname}")
