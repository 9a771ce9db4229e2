"""
Tenant Routing Middleware

Framework adapter for the dispatcher: classifies the Host header and
rewrites the ASGI path to the internal render surface

    alice.writine.com/my-post  ->  /u/alice/my-post
    blog.acme.com/my-post      ->  /d/blog.acme.com/my-post

No I/O here. Whether a custom domain is actually verified is decided by
the render surface, so routing stays a pure function of (host, path).
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from writine.logging_config import tenant_host_ctx
from writine.middleware.metrics import ROUTING_DECISIONS
from writine.services.dispatcher import route_request
from writine.services.host_classifier import RoutingConfig, normalize_request_host

logger = logging.getLogger("writine.routing")


class TenantRoutingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, config: RoutingConfig):
        super().__init__(app)
        self.config = config

    async def dispatch(self, request: Request, call_next) -> Response:
        host = request.headers.get("host", "")
        path = request.scope["path"]

        decision = route_request(host, path, self.config)
        request.state.routing = decision
        ROUTING_DECISIONS.labels(kind=decision.classification.kind).inc()

        if decision.rewritten:
            tenant_host_ctx.set(normalize_request_host(host))
            logger.debug("Rewrite %s%s -> %s", host, path, decision.internal_path)
            request.scope["path"] = decision.internal_path
            request.scope["raw_path"] = decision.internal_path.encode("utf-8")

        return await call_next(request)
