"""Utility helpers package."""

from vocab_scheduler.utils.store import KeyValueStore, MemoryStore, RedisStore, SQLStore, build_store

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "SQLStore", "build_store"]
