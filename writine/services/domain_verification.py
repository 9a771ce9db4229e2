"""
Domain verification action.

Pull-based: runs once per user-initiated "Verify" (HTTP endpoint or the
`scripts/verify_domain.py` CLI). There is no background re-check.

Transitions:
  pending / failed --(proof found)--> verified
  anything else                   --> unchanged (idempotent)
A verified claim is never moved away from verified by this action.
"""

import logging
from dataclasses import dataclass
from typing import List

from sqlalchemy.orm import Session

from writine.config import settings
from writine.crud import crud_domain
from writine.models.domain_claim import CLAIM_VERIFIED, DomainClaim
from writine.services.dns_verifier import DNSVerifier, VerificationResult

logger = logging.getLogger("writine.domain")


@dataclass
class VerificationOutcome:
    claim: DomainClaim
    result: VerificationResult
    message: str

    @property
    def verified(self) -> bool:
        return self.claim.status == CLAIM_VERIFIED

    @property
    def retryable_error(self) -> bool:
        return self.result.transient_error and not self.verified


def dns_instructions(hostname: str) -> List[dict]:
    """Records the owner can add; either one proves ownership."""
    return [
        {
            "type": "CNAME",
            "name": hostname,
            "value": settings.DNS_CNAME_TARGET,
            "note": "For subdomains such as blog.example.com",
        },
        {
            "type": "TXT",
            "name": hostname,
            "value": settings.DNS_VERIFICATION_TOKEN,
            "note": "For root domains such as example.com",
        },
    ]


def _guidance(hostname: str) -> str:
    return (
        f"Add a CNAME record for {hostname} pointing to {settings.DNS_CNAME_TARGET}, "
        f"or a TXT record with value: {settings.DNS_VERIFICATION_TOKEN}"
    )


async def verify_claim(db: Session, claim: DomainClaim, verifier: DNSVerifier) -> VerificationOutcome:
    result = await verifier.verify(claim.hostname)

    if result.is_verified:
        if claim.status != CLAIM_VERIFIED:
            claim = crud_domain.update_status(db, db_obj=claim, status=CLAIM_VERIFIED)
            logger.info("Domain verified: %s", claim.hostname)
        claim = crud_domain.mark_checked(db, db_obj=claim)
        return VerificationOutcome(
            claim=claim,
            result=result,
            message=f"Domain verified! Your blog is now accessible at {claim.hostname}",
        )

    claim = crud_domain.mark_checked(db, db_obj=claim)

    if claim.status == CLAIM_VERIFIED:
        # Proof currently missing (or DNS unreachable); keep the verified state.
        return VerificationOutcome(
            claim=claim,
            result=result,
            message="Domain is verified. Current DNS records could not be confirmed.",
        )

    if result.transient_error:
        message = f"DNS lookup failed, please try again in a moment. {_guidance(claim.hostname)}"
    else:
        message = f"DNS records not found yet. {_guidance(claim.hostname)}"
    return VerificationOutcome(claim=claim, result=result, message=message)
