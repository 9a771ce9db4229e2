"""Unit tests for hostname and handle normalization."""
import pytest

from writine.services.errors import InvalidHandle, InvalidHostname
from writine.services.hostnames import (
    normalize_handle,
    normalize_hostname,
    validate_handle,
    validate_hostname,
)

APEX = "writine.com"


@pytest.mark.parametrize("raw,expected", [
    ("ACME.com ", "acme.com"),
    ("  Blog.Acme.COM", "blog.acme.com"),
    ("https://blog.acme.com/some/path?x=1", "blog.acme.com"),
    ("http://acme.com:8080", "acme.com"),
    ("acme.com.", "acme.com"),
    ("user@acme.com", "acme.com"),
    ("", ""),
])
def test_normalize_hostname(raw, expected):
    assert normalize_hostname(raw) == expected


def test_validate_accepts_normal_domains():
    assert validate_hostname("blog.acme.com", APEX) == "blog.acme.com"
    assert validate_hostname("acme.co.uk", APEX) == "acme.co.uk"


@pytest.mark.parametrize("hostname", [
    "",
    "localhost",
    "-bad.com",
    "bad-.com",
    "under_score.com",
    "a..b.com",
    "192.168.0.1",
    "writine.com",
    "alice.writine.com",
])
def test_validate_rejects(hostname):
    with pytest.raises(InvalidHostname):
        validate_hostname(hostname, APEX)


def test_validate_rejects_overlong_hostname():
    with pytest.raises(InvalidHostname):
        validate_hostname(("a" * 60 + ".") * 5 + "com", APEX)


def test_handle_rules():
    reserved = ["www", "api", "dashboard"]
    assert validate_handle(normalize_handle(" Alice "), reserved) == "alice"
    for bad in ("al", "has space", "under_score", "a" * 64, "www", "dashboard"):
        with pytest.raises(InvalidHandle):
            validate_handle(bad, reserved)


def test_platform_path_prefixes_cannot_be_handles():
    from writine.config import settings
    from writine.services.dispatcher import EXCLUDED_PREFIXES

    for prefix in EXCLUDED_PREFIXES:
        with pytest.raises(InvalidHandle):
            validate_handle(normalize_handle(prefix), settings.reserved_subdomains)
