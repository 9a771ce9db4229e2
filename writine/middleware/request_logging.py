"""
Request Logging Middleware

- Assigns a request_id to every request (or keeps the incoming X-Request-ID)
- Logs request start & end with timing
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from writine.logging_config import generate_request_id, request_id_ctx, tenant_host_ctx
from writine.services.host_classifier import normalize_request_host

logger = logging.getLogger("writine.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        # Reuse an upstream proxy's id when it looks sane
        incoming = request.headers.get("X-Request-ID", "")
        rid = incoming if 0 < len(incoming) <= 64 and incoming.isprintable() else generate_request_id()
        request_id_ctx.set(rid)
        tenant_host_ctx.set("-")

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "-"

        logger.info("→ %s %s from %s", method, path, client_ip)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception("✗ %s %s — %.1fms (unhandled exception)", method, path, elapsed)
            raise

        # Routing runs in a child task; its context var is not visible here
        decision = getattr(request.state, "routing", None)
        if decision is not None and decision.rewritten:
            tenant_host_ctx.set(normalize_request_host(request.headers.get("host", "")))

        elapsed = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = rid

        logger.info(
            "← %s %s — %d — %.1fms",
            method, path, response.status_code, elapsed,
        )
        return response
