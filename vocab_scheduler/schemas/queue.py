"""Pydantic models for daily learning queues."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from vocab_scheduler.schemas.vocabulary import VocabularyItem


class QueueBucket(str, Enum):
    """Daily queue buckets, declared in de-duplication precedence order."""

    DUE = "due"
    RECENTLY_WRONG = "recently_wrong"
    HARD_FLAGGED = "hard_flagged"
    NEW = "new"
    MIXED_REVIEW = "mixed_review"


class DailyQueue(BaseModel):
    """Items a learner should see today, split by the reason they were picked."""

    due: list[VocabularyItem] = Field(default_factory=list)
    recently_wrong: list[VocabularyItem] = Field(default_factory=list)
    hard_flagged: list[VocabularyItem] = Field(default_factory=list)
    new: list[VocabularyItem] = Field(default_factory=list)
    mixed_review: list[VocabularyItem] = Field(default_factory=list)
    total: int = 0
    estimated_minutes: int = 0

    def bucket(self, bucket: QueueBucket) -> list[VocabularyItem]:
        return getattr(self, bucket.value)

    def in_priority_order(self) -> list[VocabularyItem]:
        """Concatenate the buckets following ``QueueBucket`` precedence."""

        items: list[VocabularyItem] = []
        for bucket in QueueBucket:
            items.extend(self.bucket(bucket))
        return items
