"""API router for version 1."""
from fastapi import APIRouter

from vocab_scheduler.api.v1.endpoints import (
    games,
    learner_settings,
    progress,
    queue,
    sessions,
    vocabulary,
)


api_router = APIRouter()
api_router.include_router(vocabulary.router)
api_router.include_router(queue.router)
api_router.include_router(progress.router)
api_router.include_router(learner_settings.router)
api_router.include_router(sessions.router)
api_router.include_router(games.router)
