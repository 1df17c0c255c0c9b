"""FastAPI application factory."""
from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any, List

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from vocab_scheduler import __version__
from vocab_scheduler.api.v1 import api_router
from vocab_scheduler.config import settings
from vocab_scheduler.utils.exceptions import (
    CorpusError,
    StorageError,
    UnknownItemError,
    ValidationError,
    handle_corpus_error,
    handle_storage_error,
    handle_unknown_item_error,
    handle_validation_error,
)


tags_metadata: List[dict[str, str]] = [
    {"name": "vocabulary", "description": "Browse the word list and its categories."},
    {"name": "queue", "description": "Build the learner's daily review queue."},
    {"name": "progress", "description": "Record answers and inspect mastery progress."},
    {"name": "settings", "description": "Read and update learner preferences."},
    {"name": "sessions", "description": "Daily session history and study streak."},
    {"name": "games", "description": "Mini-game leaderboards."},
]


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _json_error_handler(convert: Callable[[Any], HTTPException]):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        http_exc = convert(exc)
        return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})

    return handler


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Spaced-repetition scheduling for vocabulary learners.",
        version=__version__,
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors(), "message": "Validation failed"},
        )

    error_handlers = {
        StorageError: handle_storage_error,
        CorpusError: handle_corpus_error,
        ValidationError: handle_validation_error,
        UnknownItemError: handle_unknown_item_error,
    }

    for exc_class, convert in error_handlers.items():
        app.add_exception_handler(exc_class, _json_error_handler(convert))

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
