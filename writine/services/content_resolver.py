"""
Tenant Content Resolver

Read-only data access for the tenant-facing surfaces. Given a tenant
identity (handle or verified custom domain) it returns published content
only. Every miss is a plain `None`; callers render the same not-found page
whether the tenant, the domain claim, the slug or the publication status
was the reason.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from writine.crud import crud_domain, crud_post, crud_tenant
from writine.models.post import Post
from writine.models.tenant import Tenant
from writine.services.subscription import get_plan_feature

logger = logging.getLogger("writine.content")


@dataclass(frozen=True)
class PostSummary:
    id: UUID
    title: str
    slug: str
    excerpt: Optional[str]
    cover_image: Optional[str]
    reading_time: Optional[int]
    created_at: Optional[datetime]

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(
            id=post.id,
            title=post.title,
            slug=post.slug,
            excerpt=post.excerpt,
            cover_image=post.cover_image,
            reading_time=post.reading_time,
            created_at=post.created_at,
        )


class TenantContentResolver:
    def __init__(self, db: Session):
        self.db = db

    def resolve_owner_by_handle(self, handle: str) -> Optional[Tenant]:
        if not handle:
            return None
        return crud_tenant.get_by_handle(self.db, handle)

    def resolve_owner_by_verified_domain(self, hostname: str) -> Optional[Tenant]:
        """Owner of a *verified* claim; pending / failed claims resolve to None."""
        if not hostname:
            return None
        claim = crud_domain.get_verified_by_hostname(self.db, hostname.lower())
        if claim is None:
            logger.debug("No verified claim for %s", hostname)
            return None
        return crud_tenant.get(self.db, claim.tenant_id)

    def list_published_content(
        self, tenant_id: UUID, *, limit: int = 20, offset: int = 0
    ) -> List[PostSummary]:
        """Published posts, newest first."""
        limit = max(0, limit)
        offset = max(0, offset)
        posts = crud_post.list_published(self.db, tenant_id, skip=offset, limit=limit)
        return [PostSummary.from_post(p) for p in posts]

    def count_published_content(self, tenant_id: UUID) -> int:
        return crud_post.count_published(self.db, tenant_id)

    def get_published_content_by_slug(self, tenant_id: UUID, slug: str) -> Optional[Post]:
        if not slug:
            return None
        return crud_post.get_published_by_slug(self.db, tenant_id, slug)

    def is_entitled(self, tenant_id: UUID) -> bool:
        """Whether the tenant's plan removes the platform attribution footer."""
        subscription = crud_tenant.get_active_subscription(self.db, tenant_id)
        if subscription is None:
            return False
        return get_plan_feature(subscription.plan, "remove_branding")
