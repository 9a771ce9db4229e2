from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from writine.models.subscription import Subscription
from writine.models.tenant import Tenant
from writine.services.errors import HandleTaken


def get(db: Session, tenant_id: UUID) -> Optional[Tenant]:
    return db.query(Tenant).filter(Tenant.id == tenant_id).first()


def get_by_handle(db: Session, handle: str) -> Optional[Tenant]:
    return db.query(Tenant).filter(Tenant.handle == handle.lower()).first()


def set_handle(db: Session, *, db_obj: Tenant, handle: str) -> Tenant:
    db_obj.handle = handle
    db.add(db_obj)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HandleTaken(handle) from exc
    db.refresh(db_obj)
    return db_obj


def get_active_subscription(db: Session, tenant_id: UUID) -> Optional[Subscription]:
    return (
        db.query(Subscription)
        .filter(Subscription.tenant_id == tenant_id, Subscription.status == "active")
        .order_by(Subscription.created_at.desc())
        .first()
    )
