"""Pydantic models for the vocabulary corpus."""
from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class VocabularyItem(BaseModel):
    """A single lexical item supplied by the word list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    source_text: str = Field(..., validation_alias=AliasChoices("source_text", "spanish"))
    target_text: str = Field(..., validation_alias=AliasChoices("target_text", "english"))
    category: str = "General"
    pronunciation: str | None = None
    example: str | None = None


class VocabularyListResponse(BaseModel):
    """Corpus listing returned by the vocabulary endpoint."""

    total: int
    items: list[VocabularyItem]


class CategoryCount(BaseModel):
    """Number of corpus items in one category."""

    category: str
    total: int
