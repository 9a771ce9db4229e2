"""Pytest configuration and fixtures.

Tests run against an in-memory SQLite database and a mocked DNS-over-HTTPS
resolver; nothing leaves the process.
"""
import os

# Must be set before writine.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import uuid
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from writine.core.security import create_access_token
from writine.db.base_class import Base
from writine.models.domain_claim import CLAIM_PENDING, DomainClaim
from writine.models.post import POST_PUBLISHED, Post
from writine.models.subscription import Subscription
from writine.models.tenant import Tenant
from writine.services.dns_verifier import RR_TYPES, DNSVerifier
from writine.services.host_classifier import RoutingConfig

# Import all models so Base.metadata knows every table
import writine.models  # noqa: F401


# --- Session-level fixtures ---

@pytest.fixture(scope="session")
def test_engine():
    """One in-memory SQLite connection shared by every session in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def routing_config() -> RoutingConfig:
    return RoutingConfig(
        apex_domain="writine.com",
        reserved_words=frozenset({"www", "api", "app", "dashboard", "blog"}),
        dev_hosts=frozenset({"localhost", "127.0.0.1", "::1"}),
        preview_suffixes=(".vercel.app",),
    )


# --- Per-test fixtures ---

@pytest.fixture
def session_factory(test_engine):
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=test_engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


class FakeDNS:
    """In-memory DoH resolver speaking the application/dns-json format."""

    def __init__(self):
        self.records = {}
        self.failures = set()
        self.queries = []

    def add(self, name: str, record_type: str, *values: str) -> None:
        self.records.setdefault((name, record_type), []).extend(values)

    def fail(self, name: str, record_type: str) -> None:
        self.failures.add((name, record_type))

    def handler(self, request: httpx.Request) -> httpx.Response:
        name = request.url.params["name"]
        record_type = request.url.params["type"]
        self.queries.append((name, record_type))
        if (name, record_type) in self.failures:
            raise httpx.ConnectTimeout("timed out", request=request)

        body = {"Status": 0, "Question": [{"name": name, "type": RR_TYPES[record_type]}]}
        values = self.records.get((name, record_type))
        if values:
            body["Answer"] = [
                {"name": name, "type": RR_TYPES[record_type], "TTL": 300, "data": value}
                for value in values
            ]
        return httpx.Response(200, json=body)

    def verifier(self) -> DNSVerifier:
        return DNSVerifier(
            resolver_url="https://dns.test/resolve",
            cname_target="writine.com",
            verification_token="writine-verify",
            timeout=1.0,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def fake_dns() -> FakeDNS:
    return FakeDNS()


@pytest.fixture
async def client(session_factory, fake_dns):
    """
    Async HTTP client against the real app.
    get_db uses the test database; DNS goes to `fake_dns`.
    """
    from writine.main import app as fastapi_app
    from writine.api.deps import get_db, get_dns_verifier

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    fastapi_app.dependency_overrides[get_dns_verifier] = fake_dns.verifier

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://localhost") as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()


# --- Helpers ---

def create_tenant(db, handle=None, display_name=None, **kwargs) -> Tenant:
    tenant = Tenant(id=uuid.uuid4(), handle=handle, display_name=display_name, **kwargs)
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def create_post(db, tenant, slug, title=None, status=POST_PUBLISHED, age_days=0, content=None, **kwargs) -> Post:
    post = Post(
        tenant_id=tenant.id,
        slug=slug,
        title=title or slug.replace("-", " ").title(),
        content=content if content is not None else f"<p>{slug}</p>",
        status=status,
        created_at=datetime.now(timezone.utc) - timedelta(days=age_days),
        **kwargs,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def create_claim(db, tenant, hostname, status=CLAIM_PENDING) -> DomainClaim:
    claim = DomainClaim(tenant_id=tenant.id, hostname=hostname, status=status)
    db.add(claim)
    db.commit()
    db.refresh(claim)
    return claim


def create_subscription(db, tenant, plan="pro", status="active") -> Subscription:
    sub = Subscription(tenant_id=tenant.id, plan=plan, status=status)
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return sub


def auth_headers(tenant) -> dict:
    return {"Authorization": f"Bearer {create_access_token(tenant.id)}"}
