"""Pydantic models for learner settings, session history and game scores."""
from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class LearningSettings(BaseModel):
    """Learner preferences persisted alongside progress."""

    daily_goal: int = Field(15, ge=1)
    prefer_typed: bool = False
    show_hints: bool = True
    tts_accent: Literal["es-ES", "es-MX"] = "es-ES"
    tts_rate: float = Field(0.95, gt=0, le=2.0)
    enable_stt: bool = True


class SessionRecordRequest(BaseModel):
    """Counters for a finished learning session."""

    words_studied: int = Field(0, ge=0)
    correct_answers: int = Field(0, ge=0)
    wrong_answers: int = Field(0, ge=0)
    time_spent_minutes: int = Field(0, ge=0)
    completed_goal: bool = False


class DailySession(SessionRecordRequest):
    """Aggregated learning activity for one calendar day."""

    date: dt.date


class GameType(str, Enum):
    """Mini-games that report scores."""

    QUICK_MATCH = "quick-match"
    SPRINT = "sprint"
    TYPE_IT = "type-it"
    LISTENING = "listening"


class GameScore(BaseModel):
    """A single mini-game result."""

    game: GameType
    score: int = Field(..., ge=0)
    date: dt.date
    accuracy: float | None = Field(None, ge=0, le=100)
    streak: int | None = Field(None, ge=0)
    time_taken: float | None = Field(None, ge=0)


class BestScoreResponse(BaseModel):
    """Best score recorded for a game."""

    game: GameType
    best_score: int
