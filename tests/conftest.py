"""Shared fixtures for scheduler tests."""

import asyncio
import datetime as dt
import random
from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from vocab_scheduler.api.deps import get_corpus, get_learning_engine
from vocab_scheduler.main import create_app
from vocab_scheduler.schemas import ItemStatistics, VocabularyItem
from vocab_scheduler.services import LearningEngine, MasteryStore
from vocab_scheduler.utils.exceptions import StorageError
from vocab_scheduler.utils.store import MemoryStore

TODAY = dt.date(2024, 3, 15)


def make_item(item_id: str, category: str = "General") -> VocabularyItem:
    return VocabularyItem(id=item_id, source_text=item_id, target_text=f"{item_id} (en)", category=category)


def make_stats(item_id: str, **overrides: Any) -> ItemStatistics:
    """Statistics for an item that has already been seen once."""

    values: dict[str, Any] = {"item_id": item_id, "times_seen": 1}
    values.update(overrides)
    return ItemStatistics(**values)


class SlowStore(MemoryStore):
    """Memory store that yields to the event loop on every call."""

    async def get(self, key: str) -> Any | None:
        await asyncio.sleep(0)
        return await super().get(key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.sleep(0)
        await super().set(key, value)


class FailingStore:
    """Store whose backend is unreachable."""

    def __init__(self, fail_reads: bool = True) -> None:
        self.fail_reads = fail_reads
        self.writes = 0

    async def get(self, key: str) -> Any | None:
        if self.fail_reads:
            raise StorageError(f"Failed to read {key!r}")
        return None

    async def set(self, key: str, value: Any) -> None:
        self.writes += 1
        raise StorageError(f"Failed to write {key!r}")


@pytest.fixture()
def today() -> dt.date:
    return TODAY


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def mastery_store(memory_store: MemoryStore) -> MasteryStore:
    return MasteryStore(memory_store, namespace="test")


@pytest.fixture()
def engine(mastery_store: MasteryStore, rng: random.Random) -> LearningEngine:
    return LearningEngine(mastery_store, rng=rng, clock=lambda: TODAY)


@pytest.fixture()
def corpus() -> list[VocabularyItem]:
    return [
        VocabularyItem(id="hola", source_text="hola", target_text="hello", category="Greetings"),
        VocabularyItem(id="adios", source_text="adiós", target_text="goodbye", category="Greetings"),
        VocabularyItem(id="gracias", source_text="gracias", target_text="thank you", category="Greetings"),
        VocabularyItem(id="manzana", source_text="manzana", target_text="apple", category="Food"),
        VocabularyItem(id="pan", source_text="pan", target_text="bread", category="Food"),
        VocabularyItem(id="agua", source_text="agua", target_text="water", category="Food"),
        VocabularyItem(id="comer", source_text="comer", target_text="to eat", category="Verbs"),
        VocabularyItem(id="hablar", source_text="hablar", target_text="to speak", category="Verbs"),
    ]


@pytest.fixture()
def client(engine: LearningEngine, corpus: list[VocabularyItem]) -> Generator[TestClient, None, None]:
    app = create_app()
    app.dependency_overrides[get_learning_engine] = lambda: engine
    app.dependency_overrides[get_corpus] = lambda: corpus
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
