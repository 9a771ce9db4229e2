"""
Structured Logging Configuration

Every record carries the request id and, on tenant surfaces, the tenant
host the visitor asked for. Production / staging emit one JSON object per
line; development gets a readable single-line format.

The only secrets that reach these logs are management API credentials
(Bearer JWTs), so that is all the masking covers.
"""

import json
import logging
import re
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from writine.config import settings

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
tenant_host_ctx: ContextVar[str] = ContextVar("tenant_host", default="-")

QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx", "asyncio", "sqlalchemy.engine")


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


_BEARER_RE = re.compile(r"(Bearer\s+)\S+", re.I)
_JWT_RE = re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+")
_TOKEN_FIELD_RE = re.compile(r'("?(?:access_token|token|secret_key)"?\s*[:=]\s*)"?[^"\s,}]+"?', re.I)


def mask_secrets(text: str) -> str:
    """Hide bearer credentials and JWT-shaped strings."""
    text = _BEARER_RE.sub(r"\1***", text)
    text = _TOKEN_FIELD_RE.sub(r'\1"***"', text)
    return _JWT_RE.sub("***", text)


class JSONFormatter(logging.Formatter):
    """One JSON object per line for the log collector."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": mask_secrets(record.getMessage()),
        }
        for key, ctx in (("request_id", request_id_ctx), ("tenant_host", tenant_host_ctx)):
            value = ctx.get()
            if value != "-":
                entry[key] = value
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    FORMAT = "%(asctime)s %(levelname)-7s %(name)-16s [%(request_id)s %(tenant_host)s] %(message)s"

    def __init__(self) -> None:
        super().__init__(self.FORMAT, datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = request_id_ctx.get()
        record.tenant_host = tenant_host_ctx.get()
        return mask_secrets(super().format(record))


def setup_logging() -> None:
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if settings.is_production or settings.is_staging:
        handler.setFormatter(JSONFormatter())
        root.setLevel(logging.INFO)
    else:
        handler.setFormatter(HumanFormatter())
        root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
