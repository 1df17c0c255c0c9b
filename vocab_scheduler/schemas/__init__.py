"""Pydantic schemas package."""

from vocab_scheduler.schemas.progress import (
    AnswerRequest,
    AnswerResponse,
    AnswerType,
    CategoryProgress,
    HardFlagResponse,
    ItemProgressDetail,
    ItemStatistics,
    LearningOutcome,
    ProgressSummary,
    ResultRequest,
)
from vocab_scheduler.schemas.queue import DailyQueue, QueueBucket
from vocab_scheduler.schemas.session import (
    BestScoreResponse,
    DailySession,
    GameScore,
    GameType,
    LearningSettings,
    SessionRecordRequest,
)
from vocab_scheduler.schemas.vocabulary import CategoryCount, VocabularyItem, VocabularyListResponse

__all__ = [
    "AnswerRequest",
    "AnswerResponse",
    "AnswerType",
    "BestScoreResponse",
    "CategoryCount",
    "CategoryProgress",
    "DailyQueue",
    "DailySession",
    "GameScore",
    "GameType",
    "HardFlagResponse",
    "ItemProgressDetail",
    "ItemStatistics",
    "LearningOutcome",
    "LearningSettings",
    "ProgressSummary",
    "QueueBucket",
    "ResultRequest",
    "SessionRecordRequest",
    "VocabularyItem",
    "VocabularyListResponse",
]
