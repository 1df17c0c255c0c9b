"""Endpoints for daily learning queues."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from vocab_scheduler.api.deps import get_corpus, get_learning_engine
from vocab_scheduler.schemas import DailyQueue, VocabularyItem
from vocab_scheduler.services.learning_engine import LearningEngine


router = APIRouter(prefix="/queue", tags=["queue"])


@router.get("/", response_model=DailyQueue)
async def get_daily_queue(
    *,
    daily_goal: int | None = Query(None, ge=1, description="Overrides the learner's stored daily goal"),
    corpus: list[VocabularyItem] = Depends(get_corpus),
    engine: LearningEngine = Depends(get_learning_engine),
) -> DailyQueue:
    """Return today's queue split into priority buckets."""

    return await engine.build_daily_queue(corpus, daily_goal)


@router.get("/session", response_model=list[VocabularyItem])
async def get_session_queue(
    *,
    daily_goal: int | None = Query(None, ge=1, description="Overrides the learner's stored daily goal"),
    corpus: list[VocabularyItem] = Depends(get_corpus),
    engine: LearningEngine = Depends(get_learning_engine),
) -> list[VocabularyItem]:
    """Return today's queue as one list, interleaved by category."""

    return await engine.get_daily_session_queue(corpus, daily_goal)
