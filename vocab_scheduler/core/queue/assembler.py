"""Daily queue assembly.

Priority items (due, recently wrong, hard flagged) are always included in
full, even when they exceed the daily goal. Whatever budget is left is
filled with randomly chosen new items and then with a random mix of seen
items that matched no priority bucket.
"""
from __future__ import annotations

import datetime as dt
import math
import random
from collections.abc import Mapping, Sequence
from typing import TypeVar

from vocab_scheduler.core.queue.classifier import classify
from vocab_scheduler.core.queue.interleave import interleave_by_category
from vocab_scheduler.core.srs.intervals import DEFAULT_RECENT_WRONG_DAYS
from vocab_scheduler.schemas.progress import ItemStatistics
from vocab_scheduler.schemas.queue import DailyQueue
from vocab_scheduler.schemas.vocabulary import VocabularyItem

DEFAULT_MINUTES_PER_ITEM = 0.5

T = TypeVar("T")


def _shuffled(items: Sequence[T], rng: random.Random) -> list[T]:
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def _exclude_placed(items: Sequence[VocabularyItem], placed: set[str]) -> list[VocabularyItem]:
    """Keep items not already placed in a higher-precedence bucket, and mark them placed."""

    kept: list[VocabularyItem] = []
    for item in items:
        if item.id in placed:
            continue
        placed.add(item.id)
        kept.append(item)
    return kept


def build_daily_queue(
    all_items: Sequence[VocabularyItem],
    all_stats: Mapping[str, ItemStatistics],
    daily_goal: int,
    today: dt.date,
    *,
    rng: random.Random | None = None,
    recent_wrong_days: int = DEFAULT_RECENT_WRONG_DAYS,
    minutes_per_item: float = DEFAULT_MINUTES_PER_ITEM,
) -> DailyQueue:
    """Return today's queue for ``daily_goal`` items."""

    if daily_goal < 1:
        raise ValueError("daily_goal must be a positive integer")
    rng = rng or random.Random()

    buckets = classify(all_items, all_stats, today, recent_wrong_days=recent_wrong_days)

    placed: set[str] = set()
    due = _exclude_placed(buckets.due, placed)
    recently_wrong = _exclude_placed(buckets.recently_wrong, placed)
    hard_flagged = _exclude_placed(buckets.hard_flagged, placed)
    priority_count = len(due) + len(recently_wrong) + len(hard_flagged)

    new_budget = max(0, daily_goal - priority_count)
    selected_new = _shuffled(buckets.new, rng)[:new_budget]

    mixed_budget = max(0, daily_goal - priority_count - len(selected_new))
    mixed_candidates = [item for item in buckets.seen_unclassified if item.id not in placed]
    selected_mixed = _shuffled(mixed_candidates, rng)[:mixed_budget]

    total = priority_count + len(selected_new) + len(selected_mixed)
    return DailyQueue(
        due=_shuffled(due, rng),
        recently_wrong=_shuffled(recently_wrong, rng),
        hard_flagged=_shuffled(hard_flagged, rng),
        new=selected_new,
        mixed_review=selected_mixed,
        total=total,
        estimated_minutes=math.ceil(total * minutes_per_item),
    )


def get_daily_session_queue(
    all_items: Sequence[VocabularyItem],
    all_stats: Mapping[str, ItemStatistics],
    daily_goal: int,
    today: dt.date,
    *,
    rng: random.Random | None = None,
    recent_wrong_days: int = DEFAULT_RECENT_WRONG_DAYS,
    minutes_per_item: float = DEFAULT_MINUTES_PER_ITEM,
) -> list[VocabularyItem]:
    """Return the daily queue flattened by priority and interleaved by category."""

    queue = build_daily_queue(
        all_items,
        all_stats,
        daily_goal,
        today,
        rng=rng,
        recent_wrong_days=recent_wrong_days,
        minutes_per_item=minutes_per_item,
    )
    return interleave_by_category(queue.in_priority_order())
