"""Service layer package."""

from vocab_scheduler.services.learning_engine import LearningEngine
from vocab_scheduler.services.mastery_store import MasteryStore

__all__ = [
    "LearningEngine",
    "MasteryStore",
]
