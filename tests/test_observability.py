"""Logging and metrics helpers."""
import json
import logging

from httpx import AsyncClient

from tests.conftest import create_tenant
from writine.logging_config import JSONFormatter, mask_secrets, request_id_ctx, tenant_host_ctx
from writine.middleware.metrics import _normalize_path


def test_mask_secrets():
    assert "abc.def.ghi" not in mask_secrets("Authorization: Bearer abc.def.ghi")
    assert mask_secrets('{"token": "s3cr3t"}') == '{"token": "***"}'
    assert mask_secrets("sub eyJhbGciOi.eyJzdWIiOi.c2lnbmF0dXJl ok") == "sub *** ok"
    assert mask_secrets("verified blog.acme.com") == "verified blog.acme.com"


def test_json_formatter_includes_tenant_host():
    rid_token = request_id_ctx.set("-")
    token = tenant_host_ctx.set("blog.acme.com")
    try:
        record = logging.LogRecord("writine.routing", logging.INFO, __file__, 1, "rewrite %s", ("/x",), None)
        entry = json.loads(JSONFormatter().format(record))
    finally:
        tenant_host_ctx.reset(token)
        request_id_ctx.reset(rid_token)

    assert entry["message"] == "rewrite /x"
    assert entry["tenant_host"] == "blog.acme.com"
    assert "request_id" not in entry


def test_metric_paths_collapse_tenant_segments():
    assert _normalize_path("/u/alice") == "/u/{handle}"
    assert _normalize_path("/u/alice/my-post") == "/u/{handle}/{slug}"
    assert _normalize_path("/d/blog.acme.com/my-post") == "/d/{hostname}/{slug}"
    assert _normalize_path("/api/v1/domains/123e4567-e89b-12d3-a456-426614174000/verify") == (
        "/api/v1/domains/{id}/verify"
    )


async def test_metrics_endpoint_counts_routing_decisions(client: AsyncClient, db):
    create_tenant(db, handle="alice")
    await client.get("/", headers={"Host": "alice.writine.com"})

    resp = await client.get("/metrics")
    assert resp.status_code == 200
    assert 'tenant_routing_decisions_total{kind="subdomain"}' in resp.text


class _ContextCapture(logging.Handler):
    def __init__(self):
        super().__init__()
        self.seen = []

    def emit(self, record):
        self.seen.append((record.getMessage(), tenant_host_ctx.get()))


async def test_request_log_carries_tenant_host(client: AsyncClient, db):
    create_tenant(db, handle="alice")
    capture = _ContextCapture()
    request_logger = logging.getLogger("writine.request")
    request_logger.addHandler(capture)
    previous_level = request_logger.level
    request_logger.setLevel(logging.INFO)
    try:
        await client.get("/", headers={"Host": "Alice.writine.com:443"})
    finally:
        request_logger.removeHandler(capture)
        request_logger.setLevel(previous_level)

    completed = [host for message, host in capture.seen if message.startswith("←")]
    assert completed == ["alice.writine.com"]
