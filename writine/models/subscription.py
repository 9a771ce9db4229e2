import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from writine.db.base_class import Base


class Subscription(Base):
    """Billing state mirrored from the payment provider's webhooks."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey("tenants.id"), nullable=False, index=True)
    plan = Column(String(32), nullable=False, default="free")  # free, pro
    status = Column(String(32), nullable=False, default="active")  # active, canceled, past_due
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tenant = relationship("Tenant", back_populates="subscriptions")
