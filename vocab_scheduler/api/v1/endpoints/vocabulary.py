"""Endpoints for browsing the vocabulary corpus."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from vocab_scheduler.api.deps import get_corpus, get_corpus_index, require_item
from vocab_scheduler.schemas import CategoryCount, VocabularyItem, VocabularyListResponse


router = APIRouter(prefix="/vocabulary", tags=["vocabulary"])


@router.get("/", response_model=VocabularyListResponse)
def list_vocabulary(
    *,
    category: str | None = Query(None, description="Only return items from this category"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    corpus: list[VocabularyItem] = Depends(get_corpus),
) -> VocabularyListResponse:
    """Return a page of the word list."""

    items = [item for item in corpus if category is None or item.category == category]
    return VocabularyListResponse(total=len(items), items=items[offset : offset + limit])


@router.get("/categories", response_model=list[CategoryCount])
def list_categories(corpus: list[VocabularyItem] = Depends(get_corpus)) -> list[CategoryCount]:
    """Return every category with its item count, in first-seen order."""

    counts: dict[str, int] = {}
    for item in corpus:
        counts[item.category] = counts.get(item.category, 0) + 1
    return [CategoryCount(category=category, total=total) for category, total in counts.items()]


@router.get("/{item_id}", response_model=VocabularyItem)
def get_vocabulary_item(
    item_id: str,
    index: dict[str, VocabularyItem] = Depends(get_corpus_index),
) -> VocabularyItem:
    return require_item(item_id, index)
