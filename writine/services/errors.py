"""Domain errors raised by the routing and domain-management services.

API endpoints translate these into HTTP responses; render surfaces never
let them reach an anonymous visitor.
"""


class WritineError(Exception):
    """Base class for expected, user-facing failures."""


class InvalidHostname(WritineError):
    pass


class InvalidHandle(WritineError):
    pass


class HostnameAlreadyClaimed(WritineError):
    def __init__(self, hostname: str):
        super().__init__(f"Hostname {hostname} is already in use")
        self.hostname = hostname


class HandleTaken(WritineError):
    def __init__(self, handle: str):
        super().__init__(f"Handle {handle} is already taken")
        self.handle = handle


class DNSLookupError(WritineError):
    """A DNS-over-HTTPS lookup timed out or failed in transport. Retryable."""
