"""Endpoints for daily session history."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from vocab_scheduler.api.deps import get_learning_engine
from vocab_scheduler.schemas import DailySession, SessionRecordRequest
from vocab_scheduler.services.learning_engine import LearningEngine


router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/", response_model=list[DailySession])
async def list_sessions(engine: LearningEngine = Depends(get_learning_engine)) -> list[DailySession]:
    """Return the retained session history, oldest first."""

    return await engine.get_sessions()


@router.post("/", response_model=DailySession, status_code=status.HTTP_201_CREATED)
async def record_session(
    payload: SessionRecordRequest,
    engine: LearningEngine = Depends(get_learning_engine),
) -> DailySession:
    """Add a finished session to today's totals and update the streak."""

    return await engine.record_session(**payload.model_dump())
