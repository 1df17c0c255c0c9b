"""Endpoints for learner preferences."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from vocab_scheduler.api.deps import get_learning_engine
from vocab_scheduler.schemas import LearningSettings
from vocab_scheduler.services.learning_engine import LearningEngine


router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=LearningSettings)
async def read_settings(engine: LearningEngine = Depends(get_learning_engine)) -> LearningSettings:
    return await engine.get_settings()


@router.put("/", response_model=LearningSettings)
async def update_settings(
    payload: LearningSettings,
    engine: LearningEngine = Depends(get_learning_engine),
) -> LearningSettings:
    """Replace the stored learner preferences."""

    return await engine.save_settings(payload)
