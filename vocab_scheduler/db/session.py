"""Database session and engine management."""
from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from vocab_scheduler.config import settings


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create an engine usable from worker threads."""

    url = database_url or settings.DATABASE_URL
    options: dict[str, Any] = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # store calls run through asyncio.to_thread
        options["connect_args"] = {"check_same_thread": False}
        if url in {"sqlite://", "sqlite:///:memory:"}:
            options["poolclass"] = StaticPool
    else:
        options.update(
            poolclass=QueuePool,
            pool_size=10,
            max_overflow=20,
            pool_recycle=3600,  # Recycle connections after 1 hour
        )
    return create_engine(url, **options)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to ``engine``."""

    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
