import uuid
from sqlalchemy import Column, String, DateTime, Text, Uuid, func
from sqlalchemy.orm import relationship
from writine.db.base_class import Base


class Tenant(Base):
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    # Reserved-subdomain slug ({handle}.writine.com); null until the tenant picks one
    handle = Column(String(63), unique=True, nullable=True, index=True)
    display_name = Column(String(120), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    domain_claims = relationship("DomainClaim", back_populates="tenant", cascade="all, delete-orphan")
    posts = relationship("Post", back_populates="tenant", cascade="all, delete-orphan")
    subscriptions = relationship("Subscription", back_populates="tenant", cascade="all, delete-orphan")

    @property
    def author_name(self) -> str:
        return self.display_name or self.handle or ""
