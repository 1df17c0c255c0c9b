"""Application configuration management."""
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    PROJECT_NAME: str = "Vocabulary Scheduler"
    API_V1_STR: str = "/api/v1"

    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    STORE_BACKEND: Literal["memory", "sql", "redis"] = Field(
        "sql", description="Persisted key-value store used for learner state"
    )
    DATABASE_URL: str = Field(
        "sqlite:///./vocab_scheduler.db",
        description="SQLAlchemy database URL for the sql store backend",
    )
    REDIS_URL: Optional[AnyUrl] = Field(
        None, description="Redis connection string for the redis store backend"
    )
    STORE_NAMESPACE: str = Field("vocab", description="Prefix applied to every persisted key")

    CORPUS_PATH: Path = Field(
        Path(__file__).resolve().parent.parent / "data" / "words.json",
        description="JSON word list loaded when the API starts",
    )

    DEFAULT_DAILY_GOAL: int = Field(15, ge=1, description="Daily goal used before the learner sets one")
    RECENT_WRONG_WINDOW_DAYS: int = Field(7, ge=0, description="Days a wrong answer keeps an item in priority review")
    MINUTES_PER_ITEM: float = Field(0.5, gt=0, description="Estimated minutes spent on one queue item")
    SESSION_HISTORY_DAYS: int = Field(30, ge=1, description="Days of session history retained")
    GAME_SCORES_KEPT: int = Field(10, ge=1, description="Best scores retained per mini-game")
    CLOSE_MATCH_THRESHOLD: float = Field(
        0.85, ge=0.0, le=1.0, description="Similarity at which a typed answer counts as close enough"
    )

    LOG_LEVEL: str = Field("INFO", description="Minimum loguru level for the API process")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


settings = get_settings()
