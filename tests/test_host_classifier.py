"""Unit tests for Host header classification."""
import pytest

from writine.services.host_classifier import (
    PLATFORM,
    CustomDomain,
    Platform,
    ReservedSubdomain,
    RoutingConfig,
    build_routing_config,
    classify_host,
    normalize_request_host,
)


@pytest.mark.parametrize("host", [
    "writine.com",
    "WRITINE.COM",
    "www.writine.com",
    "WwW.Writine.Com",
    "writine.com:443",
    "writine.com.",
])
def test_apex_and_www_are_platform(routing_config, host):
    assert classify_host(host, routing_config) == PLATFORM


@pytest.mark.parametrize("host,handle", [
    ("alice.writine.com", "alice"),
    ("Alice.writine.com", "alice"),
    ("ALICE.WRITINE.COM", "alice"),
    ("bob-smith.writine.com:8080", "bob-smith"),
    ("42.writine.com", "42"),
])
def test_subdomain_of_apex_is_reserved_subdomain(routing_config, host, handle):
    assert classify_host(host, routing_config) == ReservedSubdomain(handle=handle)


def test_case_does_not_change_classification(routing_config):
    assert classify_host("Label.writine.com", routing_config) == classify_host("label.writine.com", routing_config)


@pytest.mark.parametrize("label", ["api", "app", "dashboard", "blog"])
def test_reserved_words_never_become_handles(routing_config, label):
    result = classify_host(f"{label}.writine.com", routing_config)
    assert not isinstance(result, ReservedSubdomain)
    assert result == CustomDomain(hostname=f"{label}.writine.com")


@pytest.mark.parametrize("host", [
    "blog.acme.com",
    "acme.com",
    "a.b.writine.com",          # nested label does not match the handle pattern
    "writine.com.evil.org",
    "alice_x.writine.com",
])
def test_everything_else_is_custom_domain(routing_config, host):
    assert classify_host(host, routing_config) == CustomDomain(hostname=host)


@pytest.mark.parametrize("host", [
    "localhost",
    "localhost:8000",
    "127.0.0.1:3000",
    "[::1]:8000",
    "tenant.localhost",
    "writine-git-feature.vercel.app",
])
def test_dev_and_preview_hosts_are_platform(routing_config, host):
    assert isinstance(classify_host(host, routing_config), Platform)


def test_missing_host_is_platform(routing_config):
    assert classify_host("", routing_config) == PLATFORM
    assert classify_host(None, routing_config) == PLATFORM


def test_classification_is_idempotent(routing_config):
    for host in ("alice.writine.com", "blog.acme.com", "www.writine.com"):
        assert classify_host(host, routing_config) == classify_host(host, routing_config)


def test_custom_domain_strips_port(routing_config):
    assert classify_host("Blog.Acme.com:8443", routing_config) == CustomDomain(hostname="blog.acme.com")


def test_normalize_request_host():
    assert normalize_request_host("Example.COM:80") == "example.com"
    assert normalize_request_host("[::1]:8000") == "::1"
    assert normalize_request_host("  ") == ""


def test_config_normalizes_inputs():
    config = RoutingConfig(apex_domain="Writine.COM.", reserved_words=frozenset({"WWW"}))
    assert config.apex_domain == "writine.com"
    assert config.www_host == "www.writine.com"
    assert "www" in config.reserved_words


def test_build_routing_config_from_settings():
    from writine.config import Settings

    config = build_routing_config(Settings(PLATFORM_APEX_DOMAIN="example.org", RESERVED_SUBDOMAINS="www, Api"))
    assert config.apex_domain == "example.org"
    assert {"www", "api", "docs", "metrics"} <= config.reserved_words
    assert classify_host("api.example.org", config) == CustomDomain(hostname="api.example.org")
    assert classify_host("carol.example.org", config) == ReservedSubdomain(handle="carol")


@pytest.mark.parametrize("label", ["docs", "redoc", "health", "metrics", "static", "dashboard"])
def test_platform_route_labels_are_never_handles(label):
    from writine.config import settings

    config = build_routing_config(settings)
    assert label in config.reserved_words
    assert not isinstance(classify_host(f"{label}.writine.com", config), ReservedSubdomain)
