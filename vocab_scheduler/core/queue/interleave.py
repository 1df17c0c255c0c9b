"""Category interleaving for flat session queues."""
from __future__ import annotations

from collections.abc import Sequence

from vocab_scheduler.schemas.vocabulary import VocabularyItem


def interleave_by_category(items: Sequence[VocabularyItem]) -> list[VocabularyItem]:
    """Round-robin items across categories.

    Categories keep the order of their first appearance and items keep their
    relative order inside a category. Once the smaller categories run out the
    remaining items of a large category are emitted back to back.
    """

    by_category: dict[str, list[VocabularyItem]] = {}
    for item in items:
        by_category.setdefault(item.category, []).append(item)

    result: list[VocabularyItem] = []
    index = 0
    while len(result) < len(items):
        for category_items in by_category.values():
            if len(category_items) > index:
                result.append(category_items[index])
        index += 1
    return result
