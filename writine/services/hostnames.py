"""
Hostname and handle normalization for user submissions.

Submitted custom domains arrive in every shape ("ACME.com ",
"https://Blog.Acme.com/path", "acme.com:443"). They are reduced to a bare
lowercase hostname before the uniqueness check and storage.
"""

import re
from typing import Iterable

from writine.services.errors import InvalidHandle, InvalidHostname

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://")
_LABEL_RE = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")
_HANDLE_RE = re.compile(r"^[a-z0-9-]+$")

MIN_HANDLE_LENGTH = 3
MAX_HANDLE_LENGTH = 63
MAX_HOSTNAME_LENGTH = 253


def normalize_hostname(raw: str) -> str:
    """Lowercase, trim, and strip scheme, path, query, port and trailing dot."""
    host = (raw or "").strip().lower()
    host = _SCHEME_RE.sub("", host)
    for sep in ("/", "?", "#"):
        host = host.split(sep, 1)[0]
    # userinfo (user@host) is never part of a claim
    host = host.rsplit("@", 1)[-1]
    host = host.split(":", 1)[0]
    return host.rstrip(".")


def validate_hostname(hostname: str, apex_domain: str) -> str:
    """Validate an already-normalized hostname for a custom-domain claim.

    Hostnames on the platform's own zone are refused: subdomains of the apex
    are addressed by handle, and a claim there could shadow platform hosts.
    """
    if not hostname or len(hostname) > MAX_HOSTNAME_LENGTH:
        raise InvalidHostname("Enter a domain such as blog.example.com")
    labels = hostname.split(".")
    if len(labels) < 2 or not all(_LABEL_RE.match(label) for label in labels):
        raise InvalidHostname("Enter a domain such as blog.example.com")
    if labels[-1].isdigit():
        raise InvalidHostname("IP addresses cannot be used as custom domains")

    apex = apex_domain.lower()
    if hostname == apex or hostname.endswith("." + apex):
        raise InvalidHostname(f"Domains under {apex} cannot be claimed")
    return hostname


def normalize_handle(raw: str) -> str:
    return (raw or "").strip().lower()


def validate_handle(handle: str, reserved: Iterable[str]) -> str:
    if not _HANDLE_RE.match(handle):
        raise InvalidHandle("Handle can only contain lowercase letters, numbers, and hyphens")
    if len(handle) < MIN_HANDLE_LENGTH:
        raise InvalidHandle(f"Handle must be at least {MIN_HANDLE_LENGTH} characters")
    if len(handle) > MAX_HANDLE_LENGTH:
        raise InvalidHandle(f"Handle must be at most {MAX_HANDLE_LENGTH} characters")
    if handle in set(reserved):
        raise InvalidHandle("This handle is reserved")
    return handle
