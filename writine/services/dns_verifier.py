"""DNS verification for custom domain ownership.

Two independent proofs, either one is sufficient:

1. CNAME record (subdomain-style domains):
       blog.example.com  CNAME  writine.com
2. TXT record (apex domains, which cannot carry a CNAME):
       example.com  TXT  "writine-verify"

Lookups go through a DNS-over-HTTPS JSON endpoint (Google / Cloudflare
`application/dns-json` format). Answers are untrusted: a missing or
malformed answer section is "no proof", never an exception. Nothing is
cached; every call re-queries live DNS.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from writine.config import Settings
from writine.services.errors import DNSLookupError

logger = logging.getLogger("writine.dns")

# DNS RR type codes as returned in DoH JSON answers
RR_TYPES = {"CNAME": 5, "TXT": 16}

STATUS_VERIFIED = "verified"
STATUS_PENDING = "pending"


@dataclass
class VerificationResult:
    """Result of one verification attempt."""

    hostname: str
    cname_valid: bool
    txt_valid: bool
    transient_error: bool = False
    error: Optional[str] = None

    @property
    def is_verified(self) -> bool:
        return self.cname_valid or self.txt_valid

    @property
    def status(self) -> str:
        # An unsuccessful check leaves the claim pending so it can be retried
        return STATUS_VERIFIED if self.is_verified else STATUS_PENDING


def normalize_txt_value(raw: Any) -> str:
    """Strip surrounding quotes and escaped quotes, trim, case-fold."""
    value = str(raw or "").replace('\\"', '"')
    return value.strip().strip('"').strip().casefold()


def _answer_data(payload: Any, record_type: str) -> list[str]:
    """Extract `data` strings from a DoH JSON body, tolerating junk."""
    if not isinstance(payload, dict):
        return []
    answers = payload.get("Answer")
    if not isinstance(answers, list):
        return []

    expected_type = RR_TYPES.get(record_type)
    values = []
    for answer in answers:
        if not isinstance(answer, dict):
            continue
        rr_type = answer.get("type")
        if isinstance(rr_type, int) and expected_type is not None and rr_type != expected_type:
            continue
        data = answer.get("data")
        if isinstance(data, str) and data:
            values.append(data)
    return values


class DNSVerifier:
    """Verifies domain ownership via DNS-over-HTTPS lookups."""

    def __init__(
        self,
        resolver_url: str = "https://dns.google/resolve",
        cname_target: str = "writine.com",
        verification_token: str = "writine-verify",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            resolver_url: DoH JSON endpoint.
            cname_target: string a CNAME target must contain.
            verification_token: string a TXT value must contain.
            timeout: per-lookup timeout in seconds.
            transport: optional httpx transport (tests inject a MockTransport).
        """
        self.resolver_url = resolver_url
        self.cname_target = cname_target.lower()
        self.verification_token = verification_token.casefold()
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "DNSVerifier":
        return cls(
            resolver_url=settings.DOH_RESOLVER_URL,
            cname_target=settings.DNS_CNAME_TARGET,
            verification_token=settings.DNS_VERIFICATION_TOKEN,
            timeout=settings.DNS_LOOKUP_TIMEOUT_SECONDS,
        )

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=1),
        reraise=True,
    )
    async def _fetch(self, client: httpx.AsyncClient, name: str, record_type: str) -> httpx.Response:
        return await client.get(
            self.resolver_url,
            params={"name": name, "type": record_type},
            headers={"Accept": "application/dns-json"},
        )

    async def query(self, client: httpx.AsyncClient, name: str, record_type: str) -> list[str]:
        """Return the answer data for (name, type); [] when there is none.

        Raises:
            DNSLookupError: the resolver timed out, could not be reached, or sent
                a body httpx could not decode.
        """
        try:
            response = await self._fetch(client, name, record_type)
        except httpx.TimeoutException as exc:
            raise DNSLookupError(f"DNS lookup for {name} ({record_type}) timed out") from exc
        except httpx.TransportError as exc:
            raise DNSLookupError(f"DNS lookup for {name} ({record_type}) failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise DNSLookupError(f"DNS lookup for {name} ({record_type}) returned an unreadable response: {exc}") from exc

        if response.status_code != 200:
            logger.info(
                "DoH resolver answered %s for %s %s", response.status_code, record_type, name
            )
            return []
        try:
            payload = response.json()
        except ValueError:
            logger.info("DoH resolver returned a non-JSON body for %s %s", record_type, name)
            return []
        return _answer_data(payload, record_type)

    async def has_cname_proof(self, client: httpx.AsyncClient, hostname: str) -> bool:
        records = await self.query(client, hostname, "CNAME")
        return any(self.cname_target in record.lower() for record in records)

    async def has_txt_proof(self, client: httpx.AsyncClient, hostname: str) -> bool:
        records = await self.query(client, hostname, "TXT")
        return any(self.verification_token in normalize_txt_value(record) for record in records)

    async def verify(self, hostname: str) -> VerificationResult:
        """Run both proofs against live DNS.

        A lookup failure on one proof does not hide success on the other.
        When neither proof holds and a lookup failed, the result is marked
        transient so the caller can ask the user to retry.
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            cname, txt = await asyncio.gather(
                self.has_cname_proof(client, hostname),
                self.has_txt_proof(client, hostname),
                return_exceptions=True,
            )

        errors = [r for r in (cname, txt) if isinstance(r, BaseException)]
        for err in errors:
            if not isinstance(err, DNSLookupError):
                raise err

        result = VerificationResult(
            hostname=hostname,
            cname_valid=cname is True,
            txt_valid=txt is True,
        )
        if errors and not result.is_verified:
            result.transient_error = True
            result.error = str(errors[0])
            logger.warning("DNS verification for %s hit a lookup failure: %s", hostname, result.error)
        else:
            logger.info(
                "DNS verification for %s: cname=%s txt=%s",
                hostname, result.cname_valid, result.txt_valid,
            )
        return result
