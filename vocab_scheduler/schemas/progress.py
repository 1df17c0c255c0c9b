"""Pydantic models for learner progress."""
from __future__ import annotations

from datetime import date
from enum import Enum

from loguru import logger
from pydantic import BaseModel, Field, field_validator

from vocab_scheduler.core.srs.intervals import MAX_LEVEL, MIN_LEVEL, clamp_level


class LearningOutcome(str, Enum):
    """Outcome of a single learner answer."""

    CORRECT = "correct"
    WRONG = "wrong"
    SKIPPED = "skipped"


class AnswerType(str, Enum):
    """How the learner is asked to recall an item."""

    MULTIPLE_CHOICE = "multiple_choice"
    TYPED = "typed"


class ItemStatistics(BaseModel):
    """Interaction history and mastery state for one vocabulary item."""

    item_id: str
    times_seen: int = Field(0, ge=0)
    times_correct: int = Field(0, ge=0)
    times_wrong: int = Field(0, ge=0)
    consecutive_correct_streak: int = Field(0, ge=0)
    mastery_level: int = MIN_LEVEL
    last_seen_date: date | None = None
    next_due_date: date | None = None
    last_wrong_date: date | None = None
    hard_flag: bool = False

    @field_validator("mastery_level", mode="before")
    @classmethod
    def _clamp_mastery_level(cls, value: object) -> int:
        level = int(value) if value is not None else MIN_LEVEL
        if level < MIN_LEVEL or level > MAX_LEVEL:
            logger.warning("Clamping out-of-range mastery level", level=level)
        return clamp_level(level)


class CategoryProgress(BaseModel):
    """Per-category completion counters."""

    total: int = 0
    learned: int = 0


class ProgressSummary(BaseModel):
    """Corpus-wide learning statistics for dashboards."""

    total_items: int
    learned: int
    mastered: int
    in_progress: int
    new: int
    due_today: int
    streak: int
    accuracy: int = Field(..., ge=0, le=100, description="Rounded percentage of correct answers")
    by_level: dict[int, int]
    by_category: dict[str, CategoryProgress]


class ResultRequest(BaseModel):
    """Payload for recording a learner answer."""

    item_id: str = Field(..., min_length=1)
    outcome: LearningOutcome


class AnswerRequest(BaseModel):
    """Payload for a typed or spoken answer that still needs grading."""

    item_id: str = Field(..., min_length=1)
    answer: str


class AnswerResponse(BaseModel):
    """Grading result together with the updated statistics."""

    item_id: str
    match: str
    similarity: float
    outcome: LearningOutcome
    statistics: ItemStatistics


class HardFlagResponse(BaseModel):
    """New hard flag state for an item."""

    item_id: str
    hard_flag: bool


class ItemProgressDetail(BaseModel):
    """Detailed view of a learner's progress for a single item."""

    item_id: str
    is_new: bool
    is_due: bool
    difficulty_label: str
    answer_type: AnswerType
    statistics: ItemStatistics | None = None
