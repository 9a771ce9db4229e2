"""Public embed API."""
import pytest
from httpx import AsyncClient

from tests.conftest import create_post, create_tenant
from writine.models.post import POST_DRAFT

EMBED_URL = "/api/embed/alice"


@pytest.fixture
def alice(db):
    tenant = create_tenant(db, handle="alice", display_name="Alice")
    create_post(db, tenant, "third", age_days=0, excerpt="Most recent")
    create_post(db, tenant, "second", age_days=1)
    create_post(db, tenant, "first", age_days=2)
    create_post(db, tenant, "draft", status=POST_DRAFT)
    return tenant


async def test_list_posts(client: AsyncClient, alice):
    resp = await client.get(EMBED_URL)
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    body = resp.json()
    assert body["author"]["name"] == "Alice"
    assert [p["slug"] for p in body["posts"]] == ["third", "second", "first"]
    assert body["posts"][0]["excerpt"] == "Most recent"
    assert "content" not in body["posts"][0]
    assert body["pagination"] == {"total": 3, "limit": 10, "offset": 0, "has_more": False}


async def test_pagination(client: AsyncClient, alice):
    body = (await client.get(EMBED_URL, params={"limit": 2})).json()
    assert [p["slug"] for p in body["posts"]] == ["third", "second"]
    assert body["pagination"]["has_more"] is True

    body = (await client.get(EMBED_URL, params={"limit": 2, "offset": 2})).json()
    assert [p["slug"] for p in body["posts"]] == ["first"]
    assert body["pagination"]["has_more"] is False


async def test_limit_bounds(client: AsyncClient, alice):
    assert (await client.get(EMBED_URL, params={"limit": 0})).status_code == 422
    assert (await client.get(EMBED_URL, params={"limit": 101})).status_code == 422


async def test_single_post(client: AsyncClient, alice):
    resp = await client.get(EMBED_URL, params={"slug": "second"})
    assert resp.status_code == 200
    post = resp.json()["post"]
    assert post["slug"] == "second"
    assert post["content"] == "<p>second</p>"


async def test_misses_look_identical(client: AsyncClient, alice):
    unknown_handle = await client.get("/api/embed/nobody")
    draft = await client.get(EMBED_URL, params={"slug": "draft"})
    missing = await client.get(EMBED_URL, params={"slug": "missing"})

    for resp in (unknown_handle, draft, missing):
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not found"}
        assert resp.headers["access-control-allow-origin"] == "*"


async def test_preflight_from_any_origin(client: AsyncClient, alice):
    resp = await client.options(
        EMBED_URL,
        headers={"Origin": "https://someones-portfolio.dev", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 204
    assert resp.headers["access-control-allow-origin"] == "*"


async def test_embed_works_from_tenant_host(client: AsyncClient, alice):
    resp = await client.get(EMBED_URL, headers={"Host": "alice.writine.com"})
    assert resp.status_code == 200
