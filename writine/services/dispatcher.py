"""
Path Rewriter / Dispatcher

Turns (host, path) into a `RoutingDecision`:

  ReservedSubdomain(handle) + P  ->  /u/{handle}{P}
  CustomDomain(hostname)   + P  ->  /d/{hostname}{P}
  Platform                       ->  no rewrite

Paths in the exclusion table always resolve as Platform, whatever the host,
so a tenant host can never shadow the operator's own routes.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

from writine.services.host_classifier import (
    PLATFORM,
    Classification,
    CustomDomain,
    ReservedSubdomain,
    RoutingConfig,
    classify_host,
)
from writine.services.platform_routes import PLATFORM_PATH_PREFIXES

SUBDOMAIN_SURFACE_PREFIX = "/u"
CUSTOM_DOMAIN_SURFACE_PREFIX = "/d"

# First path segments that are never rewritten.
EXCLUDED_PREFIXES: FrozenSet[str] = PLATFORM_PATH_PREFIXES

_UNSAFE_HOST_CHARS = re.compile(r"[^a-z0-9.:\-]")


@dataclass(frozen=True)
class RoutingDecision:
    classification: Classification
    internal_path: Optional[str] = None  # None means "no rewrite"

    @property
    def rewritten(self) -> bool:
        return self.internal_path is not None


def is_excluded_path(path: str) -> bool:
    """True for API, framework, static-file and application paths."""
    segments = [s for s in path.split("/") if s]
    if not segments:
        return False
    if segments[0].lower() in EXCLUDED_PREFIXES:
        return True
    # Static file by extension (favicon.ico, robots.txt, logo.svg ...)
    return "." in segments[-1]


def _normalize_path(path: str) -> str:
    # No trailing slash: a slash redirect would expose the internal path
    path = (path or "").rstrip("/")
    if not path:
        return ""
    return path if path.startswith("/") else "/" + path


def rewrite_path(classification: Classification, path: str) -> Optional[str]:
    suffix = _normalize_path(path)
    if isinstance(classification, ReservedSubdomain):
        return f"{SUBDOMAIN_SURFACE_PREFIX}/{classification.handle}{suffix}"
    if isinstance(classification, CustomDomain):
        hostname = _UNSAFE_HOST_CHARS.sub("_", classification.hostname)
        return f"{CUSTOM_DOMAIN_SURFACE_PREFIX}/{hostname}{suffix}"
    return None


def route_request(host: str, path: str, config: RoutingConfig) -> RoutingDecision:
    if is_excluded_path(path):
        return RoutingDecision(classification=PLATFORM)

    classification = classify_host(host, config)
    return RoutingDecision(
        classification=classification,
        internal_path=rewrite_path(classification, path),
    )
