"""Run the DNS verification action for one claimed hostname.

Same action as POST /api/v1/domains/{id}/verify, usable from a shell or a
scheduled job:

    python -m scripts.verify_domain blog.example.com
"""
import argparse
import asyncio
import logging

from writine.config import settings
from writine.crud import crud_domain
from writine.db.session import SessionLocal
from writine.services.dns_verifier import DNSVerifier
from writine.services.domain_verification import verify_claim
from writine.services.hostnames import normalize_hostname

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def run(hostname: str) -> int:
    db = SessionLocal()
    try:
        claim = crud_domain.get_by_hostname(db, normalize_hostname(hostname))
        if not claim:
            print(f"No claim for {hostname}")
            return 1

        outcome = await verify_claim(db, claim, DNSVerifier.from_settings(settings))
        print(f"{claim.hostname}: {outcome.claim.status} - {outcome.message}")
        if outcome.retryable_error:
            return 2
        return 0 if outcome.verified else 1
    finally:
        db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Verify DNS ownership of a claimed custom domain")
    parser.add_argument("hostname", help="Claimed hostname, e.g. blog.example.com")
    args = parser.parse_args()
    return asyncio.run(run(args.hostname))


if __name__ == "__main__":
    raise SystemExit(main())
