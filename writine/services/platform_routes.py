"""
First path segments owned by the platform itself.

The dispatcher never rewrites these, and the ones that are valid DNS
labels can never be tenant handles, so `{segment}.writine.com` always
stays with the platform.
"""
import re
from typing import FrozenSet

PLATFORM_PATH_PREFIXES: FrozenSet[str] = frozenset({
    # API and framework internals
    "api",
    "_next",
    "static",
    "health",
    "metrics",
    "docs",
    "redoc",
    "openapi.json",
    # Top-level application routes
    "dashboard",
    "login",
    "signup",
    "profile",
    "billing",
    "domains",
    "templates",
    "analytics",
    "blog",
    "auth",
    "site",
    "sites",
})

_LABEL_RE = re.compile(r"^[a-z0-9-]+$")

# The prefixes that could otherwise be claimed as a handle / subdomain label
PLATFORM_RESERVED_LABELS: FrozenSet[str] = frozenset(
    prefix for prefix in PLATFORM_PATH_PREFIXES if _LABEL_RE.match(prefix)
)
