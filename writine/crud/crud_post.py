from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from writine.models.post import POST_PUBLISHED, Post


def _published(db: Session, tenant_id: UUID):
    return db.query(Post).filter(Post.tenant_id == tenant_id, Post.status == POST_PUBLISHED)


def list_published(db: Session, tenant_id: UUID, *, skip: int = 0, limit: int = 20) -> List[Post]:
    return (
        _published(db, tenant_id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_published(db: Session, tenant_id: UUID) -> int:
    return db.query(func.count(Post.id)).filter(
        Post.tenant_id == tenant_id, Post.status == POST_PUBLISHED
    ).scalar() or 0


def get_published_by_slug(db: Session, tenant_id: UUID, slug: str) -> Optional[Post]:
    return _published(db, tenant_id).filter(Post.slug == slug).first()
