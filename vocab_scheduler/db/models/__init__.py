"""Database models."""

from vocab_scheduler.db.models.store import KeyValueEntry

__all__ = ["KeyValueEntry"]
