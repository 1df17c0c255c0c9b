"""Endpoints for mini-game scores."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from vocab_scheduler.api.deps import get_learning_engine
from vocab_scheduler.schemas import BestScoreResponse, GameScore, GameType
from vocab_scheduler.services.learning_engine import LearningEngine


router = APIRouter(prefix="/games", tags=["games"])


@router.get("/scores", response_model=dict[GameType, list[GameScore]])
async def list_scores(
    engine: LearningEngine = Depends(get_learning_engine),
) -> dict[GameType, list[GameScore]]:
    return await engine.get_game_scores()


@router.post("/scores", response_model=list[GameScore], status_code=status.HTTP_201_CREATED)
async def save_score(
    payload: GameScore,
    engine: LearningEngine = Depends(get_learning_engine),
) -> list[GameScore]:
    """Store a score and return the leaderboard for that game."""

    return await engine.save_game_score(payload)


@router.get("/{game}/best", response_model=BestScoreResponse)
async def best_score(
    game: GameType,
    engine: LearningEngine = Depends(get_learning_engine),
) -> BestScoreResponse:
    return BestScoreResponse(game=game, best_score=await engine.get_best_score(game))
