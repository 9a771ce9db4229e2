"""
Host Classifier

Maps a raw `Host` header to one of three routing classifications:

  Platform            writine.com, www.writine.com, dev / preview hosts
  ReservedSubdomain   {handle}.writine.com
  CustomDomain        any other host (resolved against verified claims later)

Precedence: exact platform match > dev/preview escape hatch >
reserved-subdomain pattern > custom-domain catch-all.

Pure: no I/O, no shared state. Everything it needs is in `RoutingConfig`.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Pattern, Tuple, Union

from writine.config import Settings


@dataclass(frozen=True)
class RoutingConfig:
    """Static routing configuration, built once at process start."""

    apex_domain: str
    reserved_words: FrozenSet[str] = frozenset()
    dev_hosts: FrozenSet[str] = frozenset()
    preview_suffixes: Tuple[str, ...] = ()
    subdomain_pattern: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        apex = self.apex_domain.strip().lower().rstrip(".")
        object.__setattr__(self, "apex_domain", apex)
        object.__setattr__(self, "reserved_words", frozenset(w.lower() for w in self.reserved_words))
        object.__setattr__(self, "dev_hosts", frozenset(h.lower() for h in self.dev_hosts))
        object.__setattr__(
            self, "preview_suffixes", tuple(s.lower() for s in self.preview_suffixes)
        )
        object.__setattr__(
            self, "subdomain_pattern", re.compile(rf"^([a-z0-9-]+)\.{re.escape(apex)}$")
        )

    @property
    def www_host(self) -> str:
        return f"www.{self.apex_domain}"


def build_routing_config(settings: Settings) -> RoutingConfig:
    return RoutingConfig(
        apex_domain=settings.PLATFORM_APEX_DOMAIN,
        reserved_words=frozenset(settings.reserved_subdomains),
        dev_hosts=frozenset(settings.dev_hosts),
        preview_suffixes=tuple(settings.preview_host_suffixes),
    )


# ── Classifications ──

@dataclass(frozen=True)
class Platform:
    kind = "platform"


@dataclass(frozen=True)
class ReservedSubdomain:
    handle: str
    kind = "subdomain"


@dataclass(frozen=True)
class CustomDomain:
    hostname: str
    kind = "custom_domain"


Classification = Union[Platform, ReservedSubdomain, CustomDomain]

PLATFORM = Platform()


def normalize_request_host(raw_host: str) -> str:
    """Lowercase and strip the port from a Host header value."""
    host = (raw_host or "").strip().lower()
    if host.startswith("["):
        # IPv6 literal: [::1]:3000
        end = host.find("]")
        host = host[1:end] if end != -1 else host[1:]
    elif host.count(":") == 1:
        host = host.split(":", 1)[0]
    return host.rstrip(".")


def is_dev_or_preview_host(host: str, config: RoutingConfig) -> bool:
    if host in config.dev_hosts or host.endswith(".localhost"):
        return True
    return any(host.endswith(suffix) for suffix in config.preview_suffixes)


def classify_host(raw_host: str, config: RoutingConfig) -> Classification:
    host = normalize_request_host(raw_host)

    if not host:
        return PLATFORM

    if host == config.apex_domain or host == config.www_host:
        return PLATFORM

    if is_dev_or_preview_host(host, config):
        return PLATFORM

    match = config.subdomain_pattern.match(host)
    if match and match.group(1) not in config.reserved_words:
        return ReservedSubdomain(handle=match.group(1))

    # Catch-all. An unknown host must end in a not-found at render time,
    # never fall back to Platform.
    return CustomDomain(hostname=host)
