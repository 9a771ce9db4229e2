"""
Database session and connection pool settings
=============================================

Pool parameters:
- pool_size: persistent connections (10 suits a 4-worker uvicorn)
- max_overflow: extra connections allowed at peak
- pool_timeout: max seconds to wait for a connection
- pool_recycle: recycle period (avoids idle PostgreSQL connections being dropped)
- pool_pre_ping: liveness check before use

Pool parameters are only applied to server databases; SQLite (local
development and tests) uses SQLAlchemy's default pool.
"""

import logging
import time

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from writine.config import settings

logger = logging.getLogger("writine.db")

POOL_SIZE = 10
MAX_OVERFLOW = 20
POOL_TIMEOUT = 30
POOL_RECYCLE = 1800  # 30 minutes

# Slow query threshold (ms)
SLOW_QUERY_THRESHOLD_MS = 500


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=settings.DB_ECHO,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=POOL_SIZE,
        max_overflow=MAX_OVERFLOW,
        pool_timeout=POOL_TIMEOUT,
        pool_recycle=POOL_RECYCLE,
        echo=settings.DB_ECHO,
    )


engine = build_engine(settings.database_url)


# ---------------------------------------------------------------------------
# Slow query monitoring
# ---------------------------------------------------------------------------
@event.listens_for(Engine, "before_cursor_execute")
def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_start_time", []).append(time.perf_counter())


@event.listens_for(Engine, "after_cursor_execute")
def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    started = conn.info.get("query_start_time")
    if not started:
        return
    total_ms = (time.perf_counter() - started.pop()) * 1000

    if total_ms >= SLOW_QUERY_THRESHOLD_MS:
        stmt_preview = statement[:500] + "..." if len(statement) > 500 else statement
        logger.warning(
            "Slow query detected (%.1fms): %s",
            total_ms,
            stmt_preview,
        )


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
