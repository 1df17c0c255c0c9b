"""Key-value table backing the persisted learner state."""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from vocab_scheduler.db.base import Base


class KeyValueEntry(Base):
    """One JSON document stored under a string key."""

    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<KeyValueEntry key={self.key!r}>"
