"""
Database engine utilities.
The engine owns the connection pool; store handles built on top of it are cheap and created per request.
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


def build_engine(database_url: str, *, pool_size: int = 5, pool_timeout: int = 30) -> Engine:
    """Create a pooled SQLAlchemy engine for the given database URL."""

    if database_url.startswith("sqlite"):
        return create_engine(database_url, future=True)
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=pool_size,
        pool_timeout=pool_timeout,
        future=True,
    )
