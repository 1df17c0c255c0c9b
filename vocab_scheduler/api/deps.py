"""Shared API dependencies."""
from __future__ import annotations

from fastapi import Depends

from vocab_scheduler.config import settings
from vocab_scheduler.schemas.vocabulary import VocabularyItem
from vocab_scheduler.services.corpus import load_corpus
from vocab_scheduler.services.learning_engine import LearningEngine
from vocab_scheduler.services.mastery_store import MasteryStore
from vocab_scheduler.utils.exceptions import UnknownItemError
from vocab_scheduler.utils.store import build_store

_engine_singleton: LearningEngine | None = None
_corpus_singleton: list[VocabularyItem] | None = None


def get_corpus() -> list[VocabularyItem]:
    """Return the word list, loading it on first use."""

    global _corpus_singleton
    if _corpus_singleton is None:
        _corpus_singleton = load_corpus(settings.CORPUS_PATH)
    return _corpus_singleton


def get_learning_engine() -> LearningEngine:
    """Return the process-wide learning engine bound to the configured store."""

    global _engine_singleton
    if _engine_singleton is None:
        store = MasteryStore(
            build_store(settings),
            namespace=settings.STORE_NAMESPACE,
            default_daily_goal=settings.DEFAULT_DAILY_GOAL,
        )
        _engine_singleton = LearningEngine(store, config=settings)
    return _engine_singleton


def get_corpus_index(corpus: list[VocabularyItem] = Depends(get_corpus)) -> dict[str, VocabularyItem]:
    return {item.id: item for item in corpus}


def require_item(item_id: str, index: dict[str, VocabularyItem]) -> VocabularyItem:
    """Look up ``item_id`` or raise ``UnknownItemError``."""

    item = index.get(item_id)
    if item is None:
        raise UnknownItemError(item_id)
    return item
