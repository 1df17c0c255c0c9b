"""Corpus-wide progress aggregation."""
from __future__ import annotations

import datetime as dt
import math
from collections.abc import Mapping, Sequence

from vocab_scheduler.core.srs.intervals import MAX_LEVEL, MIN_LEVEL, is_due
from vocab_scheduler.schemas.progress import CategoryProgress, ItemStatistics, ProgressSummary
from vocab_scheduler.schemas.vocabulary import VocabularyItem

LEARNED_LEVEL = 1
MASTERED_LEVEL = 4


def _percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    # half-up rounding
    return math.floor(part / whole * 100 + 0.5)


def summarize(
    all_items: Sequence[VocabularyItem],
    all_stats: Mapping[str, ItemStatistics],
    streak: int,
    today: dt.date,
) -> ProgressSummary:
    """Aggregate statistics for every corpus item; orphan records are ignored."""

    learned = mastered = in_progress = new = due_today = 0
    total_correct = total_seen = 0
    by_level = {level: 0 for level in range(MIN_LEVEL, MAX_LEVEL + 1)}
    by_category: dict[str, CategoryProgress] = {}

    for item in all_items:
        category = by_category.setdefault(item.category, CategoryProgress())
        category.total += 1

        stats = all_stats.get(item.id)
        if stats is None or stats.times_seen == 0:
            new += 1
            by_level[MIN_LEVEL] += 1
            continue

        total_correct += stats.times_correct
        total_seen += stats.times_seen
        by_level[stats.mastery_level] += 1

        if stats.mastery_level >= LEARNED_LEVEL:
            learned += 1
            category.learned += 1
        if stats.mastery_level >= MASTERED_LEVEL:
            mastered += 1
        else:
            in_progress += 1
        if is_due(stats.next_due_date, today):
            due_today += 1

    return ProgressSummary(
        total_items=len(all_items),
        learned=learned,
        mastered=mastered,
        in_progress=in_progress,
        new=new,
        due_today=due_today,
        streak=streak,
        accuracy=_percentage(total_correct, total_seen),
        by_level=by_level,
        by_category=by_category,
    )
