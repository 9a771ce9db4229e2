from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from writine.api import surfaces
from writine.api.v1.api import api_router
from writine.api.v1.endpoints import embed
from writine.config import settings
from writine.logging_config import setup_logging
from writine.middleware.cors import DashboardCORSMiddleware
from writine.middleware.metrics import PrometheusMiddleware, metrics_endpoint, set_app_info
from writine.middleware.request_logging import RequestLoggingMiddleware
from writine.middleware.tenant_routing import TenantRoutingMiddleware
from writine.services.host_classifier import build_routing_config

# ── Initialize structured logging ──
setup_logging()

# Built once; routing reads nothing else at request time
routing_config = build_routing_config(settings)

app = FastAPI(
    title=settings.APP_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

# CORS for the dashboard frontend. The embed API sets its own open headers.
EMBED_PREFIX = "/api/embed"
cors_origins = [f"https://{routing_config.apex_domain}", f"https://{routing_config.www_host}"]
if settings.BACKEND_CORS_ORIGINS:
    cors_origins.extend([origin.strip() for origin in settings.BACKEND_CORS_ORIGINS.split(",") if origin.strip()])

app.add_middleware(
    DashboardCORSMiddleware,
    exclude_prefixes=(EMBED_PREFIX,),
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics middleware – request count, latency, in-progress
app.add_middleware(PrometheusMiddleware)

# Tenant routing – classifies Host and rewrites to /u/... or /d/...
# Added after the others so it runs before them and before any route matching.
app.add_middleware(TenantRoutingMiddleware, config=routing_config)

# Request logging middleware – request ID, timing (logs the path before rewriting)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix=settings.API_V1_STR)
app.include_router(embed.router, prefix=EMBED_PREFIX, tags=["embed"])
app.include_router(surfaces.router)


def _on_tenant_surface(request: Request) -> bool:
    decision = getattr(request.state, "routing", None)
    return decision is not None and decision.rewritten


@app.exception_handler(StarletteHTTPException)
async def tenant_aware_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched paths on tenant surfaces get the generic HTML 404, not a JSON error."""
    if exc.status_code == 404 and _on_tenant_surface(request):
        return surfaces.render_not_found(request)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def tenant_aware_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Visitors sending junk query params (?page=abc) get the 404 page; the input is not echoed."""
    if _on_tenant_surface(request):
        return surfaces.render_not_found(request)
    return await request_validation_exception_handler(request, exc)


@app.get("/")
def root():
    return {"message": "Welcome to Writine", "docs": "/docs"}


@app.get("/health")
def health_check():
    return {"status": "ok", "env": settings.APP_ENV}


app.add_route("/metrics", metrics_endpoint)
set_app_info(version="1.0.0", env=settings.APP_ENV)
