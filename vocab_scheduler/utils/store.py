"""Persisted key-value stores for learner state.

Every backend exposes the same two coroutines, ``get`` and ``set``. Values
are JSON documents; callers never share mutable objects with a backend.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Protocol, runtime_checkable

from loguru import logger
from redis import asyncio as redis_asyncio
from redis.exceptions import RedisError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from vocab_scheduler.config import Settings
from vocab_scheduler.db.base import Base
from vocab_scheduler.db.models.store import KeyValueEntry
from vocab_scheduler.db.session import create_db_engine, create_session_factory
from vocab_scheduler.utils.exceptions import StorageError


@runtime_checkable
class KeyValueStore(Protocol):
    """Asynchronous JSON key-value store."""

    async def get(self, key: str) -> Any | None:
        ...

    async def set(self, key: str, value: Any) -> None:
        ...


def _decode(key: str, payload: str | None) -> Any | None:
    if payload is None:
        return None
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        logger.error(f"Stored value for {key!r} is not valid JSON: {exc}")
        raise StorageError(f"Corrupt value stored under {key!r}", {"key": key}) from exc


class MemoryStore:
    """Process-local store, mostly for tests and demos."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Any | None:
        return _decode(key, self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SQLStore:
    """Store backed by a single SQLAlchemy table.

    SQLAlchemy sessions are blocking, so each call runs in a worker thread.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine, tables=[KeyValueEntry.__table__])

    def _get_sync(self, key: str) -> Any | None:
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, key)
            payload = entry.value if entry is not None else None
        except SQLAlchemyError as exc:
            logger.error(f"Key-value read failed: {exc}")
            raise StorageError(f"Failed to read {key!r}", {"key": key}) from exc
        finally:
            session.close()
        return _decode(key, payload)

    def _set_sync(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=payload))
            else:
                entry.value = payload
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error(f"Key-value write failed: {exc}")
            raise StorageError(f"Failed to write {key!r}", {"key": key}) from exc
        finally:
            session.close()

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._set_sync, key, value)


class RedisStore:
    """Store backed by Redis string keys."""

    def __init__(self, client: redis_asyncio.Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, redis_url: str) -> "RedisStore":
        return cls(
            redis_asyncio.from_url(
                redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=1.5,
            )
        )

    async def get(self, key: str) -> Any | None:
        try:
            payload = await self._redis.get(key)
        except RedisError as exc:
            logger.error(f"Redis read failed: {exc}")
            raise StorageError(f"Failed to read {key!r}", {"key": key}) from exc
        return _decode(key, payload)

    async def set(self, key: str, value: Any) -> None:
        try:
            await self._redis.set(key, json.dumps(value))
        except RedisError as exc:
            logger.error(f"Redis write failed: {exc}")
            raise StorageError(f"Failed to write {key!r}", {"key": key}) from exc


def build_store(config: Settings) -> KeyValueStore:
    """Instantiate the backend selected by ``STORE_BACKEND``."""

    if config.STORE_BACKEND == "memory":
        return MemoryStore()
    if config.STORE_BACKEND == "redis":
        if not config.REDIS_URL:
            raise StorageError("REDIS_URL must be set for the redis store backend")
        return RedisStore.from_url(str(config.REDIS_URL))

    store = SQLStore(create_db_engine(config.DATABASE_URL))
    store.create_tables()
    return store


__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "SQLStore", "build_store"]
