"""
Domain Record Store

CRUD over DomainClaim. Listing and deletion are scoped to the owning
tenant; insertion is globally unique by hostname, enforced by the table's
unique constraint rather than a check-then-insert.
"""
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from writine.models.domain_claim import (
    CLAIM_PENDING,
    CLAIM_STATUSES,
    CLAIM_VERIFIED,
    DomainClaim,
)
from writine.services.errors import HostnameAlreadyClaimed


def create(db: Session, *, tenant_id: UUID, hostname: str) -> DomainClaim:
    db_obj = DomainClaim(tenant_id=tenant_id, hostname=hostname, status=CLAIM_PENDING)
    db.add(db_obj)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HostnameAlreadyClaimed(hostname) from exc
    db.refresh(db_obj)
    return db_obj


def list_by_tenant(db: Session, tenant_id: UUID) -> List[DomainClaim]:
    return (
        db.query(DomainClaim)
        .filter(DomainClaim.tenant_id == tenant_id)
        .order_by(DomainClaim.created_at.desc(), DomainClaim.hostname)
        .all()
    )


def get_for_tenant(db: Session, claim_id: UUID, tenant_id: UUID) -> Optional[DomainClaim]:
    return (
        db.query(DomainClaim)
        .filter(DomainClaim.id == claim_id, DomainClaim.tenant_id == tenant_id)
        .first()
    )


def get_by_hostname(db: Session, hostname: str) -> Optional[DomainClaim]:
    return db.query(DomainClaim).filter(DomainClaim.hostname == hostname).first()


def get_verified_by_hostname(db: Session, hostname: str) -> Optional[DomainClaim]:
    return (
        db.query(DomainClaim)
        .filter(DomainClaim.hostname == hostname, DomainClaim.status == CLAIM_VERIFIED)
        .first()
    )


def update_status(db: Session, *, db_obj: DomainClaim, status: str) -> DomainClaim:
    if status not in CLAIM_STATUSES:
        raise ValueError(f"Unknown claim status: {status}")
    now = datetime.now(timezone.utc)
    if status == CLAIM_VERIFIED and db_obj.status != CLAIM_VERIFIED:
        db_obj.verified_at = now
    elif status != CLAIM_VERIFIED:
        db_obj.verified_at = None
    db_obj.status = status
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def mark_checked(db: Session, *, db_obj: DomainClaim) -> DomainClaim:
    db_obj.last_checked_at = datetime.now(timezone.utc)
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def delete(db: Session, *, db_obj: DomainClaim) -> None:
    db.delete(db_obj)
    db.commit()
