"""Tenant content resolver: ownership and publication isolation."""
from tests.conftest import create_claim, create_post, create_subscription, create_tenant
from writine.models.domain_claim import CLAIM_FAILED, CLAIM_PENDING, CLAIM_VERIFIED
from writine.models.post import POST_DRAFT
from writine.services.content_resolver import TenantContentResolver


def test_resolve_by_handle_is_case_insensitive(db):
    alice = create_tenant(db, handle="alice")
    resolver = TenantContentResolver(db)
    assert resolver.resolve_owner_by_handle("Alice").id == alice.id
    assert resolver.resolve_owner_by_handle("nobody") is None
    assert resolver.resolve_owner_by_handle("") is None


def test_pending_claim_does_not_resolve(db):
    alice = create_tenant(db, handle="alice")
    create_claim(db, alice, "blog.acme.com", status=CLAIM_PENDING)
    assert TenantContentResolver(db).resolve_owner_by_verified_domain("blog.acme.com") is None


def test_failed_claim_does_not_resolve(db):
    alice = create_tenant(db, handle="alice")
    create_claim(db, alice, "blog.acme.com", status=CLAIM_FAILED)
    assert TenantContentResolver(db).resolve_owner_by_verified_domain("blog.acme.com") is None


def test_verified_claim_resolves_owner(db):
    alice = create_tenant(db, handle="alice")
    create_claim(db, alice, "blog.acme.com", status=CLAIM_VERIFIED)
    resolver = TenantContentResolver(db)
    assert resolver.resolve_owner_by_verified_domain("blog.acme.com").id == alice.id
    assert resolver.resolve_owner_by_verified_domain("BLOG.ACME.COM").id == alice.id


def test_slug_is_scoped_to_tenant(db):
    alice = create_tenant(db, handle="alice")
    bob = create_tenant(db, handle="bob")
    create_post(db, bob, "hello")
    resolver = TenantContentResolver(db)

    assert resolver.get_published_content_by_slug(alice.id, "hello") is None
    assert resolver.get_published_content_by_slug(bob.id, "hello") is not None


def test_colliding_slugs_resolve_to_each_owner(db):
    alice = create_tenant(db, handle="alice")
    bob = create_tenant(db, handle="bob")
    create_post(db, alice, "hello", title="Alice says hello")
    create_post(db, bob, "hello", title="Bob says hello")
    resolver = TenantContentResolver(db)

    assert resolver.get_published_content_by_slug(alice.id, "hello").title == "Alice says hello"
    assert resolver.get_published_content_by_slug(bob.id, "hello").title == "Bob says hello"


def test_drafts_are_never_returned(db):
    alice = create_tenant(db, handle="alice")
    create_post(db, alice, "published-one")
    create_post(db, alice, "secret-draft", status=POST_DRAFT)
    resolver = TenantContentResolver(db)

    assert resolver.get_published_content_by_slug(alice.id, "secret-draft") is None
    slugs = [p.slug for p in resolver.list_published_content(alice.id)]
    assert slugs == ["published-one"]
    assert resolver.count_published_content(alice.id) == 1


def test_list_is_newest_first_and_paginated(db):
    alice = create_tenant(db, handle="alice")
    create_post(db, alice, "oldest", age_days=3)
    create_post(db, alice, "newest", age_days=0)
    create_post(db, alice, "middle", age_days=1)
    resolver = TenantContentResolver(db)

    assert [p.slug for p in resolver.list_published_content(alice.id)] == ["newest", "middle", "oldest"]
    assert [p.slug for p in resolver.list_published_content(alice.id, limit=1, offset=1)] == ["middle"]


def test_entitlement_follows_active_subscription(db):
    free = create_tenant(db, handle="free-writer")
    pro = create_tenant(db, handle="pro-writer")
    lapsed = create_tenant(db, handle="lapsed-writer")
    create_subscription(db, free, plan="free")
    create_subscription(db, pro, plan="pro")
    create_subscription(db, lapsed, plan="pro", status="canceled")
    resolver = TenantContentResolver(db)

    assert resolver.is_entitled(pro.id)
    assert not resolver.is_entitled(free.id)
    assert not resolver.is_entitled(lapsed.id)
    assert not resolver.is_entitled(create_tenant(db, handle="no-sub").id)
