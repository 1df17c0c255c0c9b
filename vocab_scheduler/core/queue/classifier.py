"""Partition the corpus into queue buckets."""
from __future__ import annotations

import datetime as dt
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from loguru import logger

from vocab_scheduler.core.srs.intervals import DEFAULT_RECENT_WRONG_DAYS, is_due, was_wrong_recently
from vocab_scheduler.schemas.progress import ItemStatistics
from vocab_scheduler.schemas.vocabulary import VocabularyItem


@dataclass(slots=True)
class ClassifiedBuckets:
    """Result of a classification pass.

    ``due``, ``recently_wrong`` and ``hard_flagged`` may share items; the
    assembler resolves overlaps. ``new`` and ``seen_unclassified`` are
    disjoint from everything else.
    """

    due: list[VocabularyItem] = field(default_factory=list)
    recently_wrong: list[VocabularyItem] = field(default_factory=list)
    hard_flagged: list[VocabularyItem] = field(default_factory=list)
    new: list[VocabularyItem] = field(default_factory=list)
    seen_unclassified: list[VocabularyItem] = field(default_factory=list)


def classify(
    all_items: Sequence[VocabularyItem],
    all_stats: Mapping[str, ItemStatistics],
    today: dt.date,
    *,
    recent_wrong_days: int = DEFAULT_RECENT_WRONG_DAYS,
) -> ClassifiedBuckets:
    """Sort every corpus item into the buckets its statistics satisfy."""

    buckets = ClassifiedBuckets()
    for item in all_items:
        stats = all_stats.get(item.id)
        if stats is None or stats.times_seen == 0:
            buckets.new.append(item)
            continue

        matched = False
        if is_due(stats.next_due_date, today):
            buckets.due.append(item)
            matched = True
        if was_wrong_recently(stats.last_wrong_date, today, recent_wrong_days):
            buckets.recently_wrong.append(item)
            matched = True
        if stats.hard_flag:
            buckets.hard_flagged.append(item)
            matched = True
        if not matched:
            buckets.seen_unclassified.append(item)

    orphans = len(set(all_stats) - {item.id for item in all_items})
    if orphans:
        logger.debug("Ignoring statistics without a corpus item", orphans=orphans)
    return buckets
