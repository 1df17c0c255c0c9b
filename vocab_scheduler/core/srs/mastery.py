"""Mastery level state machine.

Answers move an item between mastery levels 0 (new) and 5 (mastered):

* a correct answer extends the consecutive-correct streak and, once the
  streak has reached two, raises the level by one. The streak is not reset
  on level-up, so after two correct answers in a row every further correct
  answer keeps advancing the level.
* a wrong answer resets the streak, records the wrong date and drops the
  level by one.
* a skipped answer only records exposure: level, streak and due date stay
  untouched.

The due date is recomputed from the interval table after every correct or
wrong answer.
"""
from __future__ import annotations

import datetime as dt
import random

from vocab_scheduler.core.srs.intervals import MAX_LEVEL, MIN_LEVEL, clamp_level, compute_next_due
from vocab_scheduler.schemas.progress import AnswerType, ItemStatistics, LearningOutcome

LEVEL_UP_STREAK = 2


def new_statistics(item_id: str) -> ItemStatistics:
    """Return a fresh record for an item that has never been answered."""

    return ItemStatistics(item_id=item_id)


def apply_result(
    stats: ItemStatistics | None,
    outcome: LearningOutcome,
    today: dt.date,
    *,
    item_id: str | None = None,
) -> ItemStatistics:
    """Return the statistics after applying one learner answer.

    ``stats`` is not modified; a new record is returned. When ``stats`` is
    ``None`` the item is treated as never seen and ``item_id`` must be given.
    """

    if stats is None:
        if item_id is None:
            raise ValueError("item_id is required when no statistics exist yet")
        stats = new_statistics(item_id)
    updated = stats.model_copy()

    updated.times_seen += 1
    updated.last_seen_date = today

    if outcome == LearningOutcome.SKIPPED:
        return updated

    level = clamp_level(updated.mastery_level)
    if outcome == LearningOutcome.CORRECT:
        updated.times_correct += 1
        updated.consecutive_correct_streak += 1
        if updated.consecutive_correct_streak >= LEVEL_UP_STREAK and level < MAX_LEVEL:
            level += 1
    elif outcome == LearningOutcome.WRONG:
        updated.times_wrong += 1
        updated.consecutive_correct_streak = 0
        updated.last_wrong_date = today
        if level > MIN_LEVEL:
            level -= 1
    else:
        raise ValueError(f"Unknown outcome: {outcome}")

    updated.mastery_level = level
    updated.next_due_date = compute_next_due(level, today)
    return updated


def toggle_hard_flag(stats: ItemStatistics | None, item_id: str) -> ItemStatistics:
    """Flip the hard flag; an item without statistics gets a flagged record."""

    if stats is None:
        return new_statistics(item_id).model_copy(update={"hard_flag": True})
    return stats.model_copy(update={"hard_flag": not stats.hard_flag})


def get_answer_type(level: int, prefer_typed: bool, rng: random.Random | None = None) -> AnswerType:
    """Pick the answer format for an item based on how well it is known."""

    if prefer_typed:
        return AnswerType.TYPED if level >= 2 else AnswerType.MULTIPLE_CHOICE

    if level <= 1:
        return AnswerType.MULTIPLE_CHOICE
    if level <= 3:
        rng = rng or random.Random()
        return AnswerType.TYPED if rng.random() > 0.5 else AnswerType.MULTIPLE_CHOICE
    return AnswerType.TYPED


def get_difficulty_label(level: int) -> str:
    """Return the learner-facing label for a mastery level."""

    if level <= 1:
        return "Learning"
    if level <= 3:
        return "Familiar"
    return "Mastered"
