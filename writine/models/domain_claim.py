"""
Domain Claim Model

A tenant's claim over an external hostname, with DNS verification status.
Only `verified` claims route traffic; `pending` / `failed` rows are visible
to their owner alone.
"""
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint, Uuid, func
from sqlalchemy.orm import relationship
from writine.db.base_class import Base

CLAIM_PENDING = "pending"
CLAIM_VERIFIED = "verified"
CLAIM_FAILED = "failed"
CLAIM_STATUSES = (CLAIM_PENDING, CLAIM_VERIFIED, CLAIM_FAILED)


class DomainClaim(Base):
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey("tenants.id"), nullable=False, index=True)
    # Lowercase, no scheme / port / path. The unique constraint closes the
    # race between two tenants submitting the same hostname.
    hostname = Column(String(253), unique=True, nullable=False, index=True)
    status = Column(String(16), nullable=False, default=CLAIM_PENDING)

    verified_at = Column(DateTime(timezone=True), nullable=True)
    last_checked_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    tenant = relationship("Tenant", back_populates="domain_claims")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'verified', 'failed')",
            name="ck_domainclaims_status",
        ),
    )

    @property
    def is_verified(self) -> bool:
        return self.status == CLAIM_VERIFIED

    def __repr__(self) -> str:
        return f"<DomainClaim(hostname={self.hostname!r}, status={self.status!r})>"
