"""
Custom Domain Management API

Lets a tenant:
  1. Add a custom domain (claim starts as `pending`)
  2. Get DNS verification instructions (CNAME or TXT)
  3. Verify DNS (user-triggered, re-queries live DNS every time)
  4. Give up on a claim (`failed`), list, delete

Pending / failed claims are only ever shown here, to their owner.
"""
import logging
from typing import Any, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from writine.api import deps
from writine.config import settings
from writine.crud import crud_domain
from writine.models.domain_claim import CLAIM_FAILED, CLAIM_VERIFIED, DomainClaim
from writine.models.tenant import Tenant
from writine.schemas.domain import DomainCreate, DomainInfo, DomainVerifyResult
from writine.services.dns_verifier import DNSVerifier
from writine.services.domain_verification import dns_instructions, verify_claim
from writine.services.errors import HostnameAlreadyClaimed, InvalidHostname
from writine.services.hostnames import normalize_hostname, validate_hostname

router = APIRouter()
logger = logging.getLogger("writine.domain")


# ── Helpers ──

def _to_info(claim: DomainClaim) -> DomainInfo:
    return DomainInfo(
        id=claim.id,
        hostname=claim.hostname,
        status=claim.status,
        created_at=claim.created_at,
        verified_at=claim.verified_at,
        last_checked_at=claim.last_checked_at,
        dns_instructions=dns_instructions(claim.hostname),
    )


def _get_owned_claim(db: Session, domain_id: UUID, tenant: Tenant) -> DomainClaim:
    claim = crud_domain.get_for_tenant(db, domain_id, tenant.id)
    if not claim:
        raise HTTPException(status_code=404, detail="Domain not found")
    return claim


# ── Endpoints ──

@router.get("/", response_model=List[DomainInfo])
def list_domains(
    db: Session = Depends(deps.get_db),
    current_tenant: Tenant = Depends(deps.get_current_tenant),
) -> Any:
    """List the current tenant's domain claims, newest first."""
    return [_to_info(d) for d in crud_domain.list_by_tenant(db, current_tenant.id)]


@router.post("/", response_model=DomainInfo, status_code=201)
def add_domain(
    body: DomainCreate,
    db: Session = Depends(deps.get_db),
    current_tenant: Tenant = Depends(deps.get_current_tenant),
) -> Any:
    """Claim a hostname. It routes nothing until verified."""
    hostname = normalize_hostname(body.hostname)
    try:
        validate_hostname(hostname, settings.PLATFORM_APEX_DOMAIN)
        claim = crud_domain.create(db, tenant_id=current_tenant.id, hostname=hostname)
    except InvalidHostname as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HostnameAlreadyClaimed:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This domain is already in use")

    logger.info("Custom domain claimed: %s for tenant %s", claim.hostname, current_tenant.id)
    return _to_info(claim)


@router.post("/{domain_id}/verify", response_model=DomainVerifyResult)
async def verify_domain(
    domain_id: UUID,
    db: Session = Depends(deps.get_db),
    current_tenant: Tenant = Depends(deps.get_current_tenant),
    verifier: DNSVerifier = Depends(deps.get_dns_verifier),
) -> Any:
    """
    Check DNS for proof of ownership.

    Either record is sufficient:
      {hostname}  CNAME  writine.com
      {hostname}  TXT    "writine-verify"
    """
    claim = _get_owned_claim(db, domain_id, current_tenant)
    outcome = await verify_claim(db, claim, verifier)

    if outcome.retryable_error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=outcome.message)

    return DomainVerifyResult(
        hostname=outcome.claim.hostname,
        status=outcome.claim.status,
        verified=outcome.verified,
        message=outcome.message,
        dns_instructions=dns_instructions(outcome.claim.hostname),
    )


@router.post("/{domain_id}/give-up", response_model=DomainInfo)
def give_up_domain(
    domain_id: UUID,
    db: Session = Depends(deps.get_db),
    current_tenant: Tenant = Depends(deps.get_current_tenant),
) -> Any:
    """Mark an unverified claim as failed. It can still be verified later or deleted."""
    claim = _get_owned_claim(db, domain_id, current_tenant)
    if claim.status == CLAIM_VERIFIED:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Domain is already verified; delete it to stop serving it",
        )
    claim = crud_domain.update_status(db, db_obj=claim, status=CLAIM_FAILED)
    logger.info("Custom domain marked failed by owner: %s", claim.hostname)
    return _to_info(claim)


@router.delete("/{domain_id}")
def delete_domain(
    domain_id: UUID,
    db: Session = Depends(deps.get_db),
    current_tenant: Tenant = Depends(deps.get_current_tenant),
) -> Any:
    """Delete a claim. Routing stops immediately and the hostname is free again."""
    claim = _get_owned_claim(db, domain_id, current_tenant)
    hostname = claim.hostname
    crud_domain.delete(db, db_obj=claim)

    logger.info("Custom domain deleted: %s", hostname)
    return {"message": f"Domain {hostname} removed"}
