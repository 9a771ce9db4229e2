import uuid
from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, Text, Uuid, UniqueConstraint, Index, func,
)
from sqlalchemy.orm import relationship
from writine.db.base_class import Base

POST_DRAFT = "draft"
POST_PUBLISHED = "published"


class Post(Base):
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey("tenants.id"), nullable=False, index=True)

    slug = Column(String(200), nullable=False)
    title = Column(String(300), nullable=False)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=False, default="")  # editor HTML
    cover_image = Column(String(500), nullable=True)
    meta_description = Column(String(300), nullable=True)
    reading_time = Column(Integer, nullable=True)  # minutes
    status = Column(String(16), nullable=False, default=POST_DRAFT)  # draft, published

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    tenant = relationship("Tenant", back_populates="posts")

    __table_args__ = (
        UniqueConstraint("tenant_id", "slug", name="uq_posts_tenant_slug"),
        Index("ix_posts_tenant_status_created", "tenant_id", "status", "created_at"),
    )
