import datetime as dt
import random

import pytest

from vocab_scheduler.core.queue import build_daily_queue, classify, get_daily_session_queue
from vocab_scheduler.schemas import QueueBucket
from tests.conftest import make_item, make_stats


def ids(items):
    return {item.id for item in items}


def test_priority_items_are_never_truncated(today, rng):
    due_items = [make_item(f"due-{index}") for index in range(10)]
    new_items = [make_item(f"new-{index}") for index in range(5)]
    stats = {item.id: make_stats(item.id, next_due_date=today) for item in due_items}

    queue = build_daily_queue(due_items + new_items, stats, 5, today, rng=rng)

    assert ids(queue.due) == ids(due_items)
    assert queue.new == []
    assert queue.mixed_review == []
    assert queue.total == 10
    assert queue.estimated_minutes == 5


def test_new_items_backfill_the_goal(today, rng):
    corpus = [make_item(f"word-{index}") for index in range(30)]

    queue = build_daily_queue(corpus, {}, 15, today, rng=rng)

    assert len(queue.new) == 15
    assert queue.total == 15
    assert queue.estimated_minutes == 8


def test_all_new_corpus(today, rng):
    corpus = [make_item(f"word-{index}") for index in range(20)]

    queue = build_daily_queue(corpus, {}, 10, today, rng=rng)

    assert queue.due == []
    assert queue.recently_wrong == []
    assert queue.hard_flagged == []
    assert queue.mixed_review == []
    assert len(queue.new) == 10
    assert ids(queue.new) <= ids(corpus)
    assert queue.total == 10
    assert queue.estimated_minutes == 5


def test_short_corpus_reduces_total(today, rng):
    corpus = [make_item(f"word-{index}") for index in range(3)]

    queue = build_daily_queue(corpus, {}, 10, today, rng=rng)

    assert queue.total == 3
    assert queue.estimated_minutes == 2


def test_item_matching_several_buckets_appears_once(today, rng):
    everything = make_item("everything")
    wrong_and_flagged = make_item("wrong-and-flagged")
    corpus = [everything, wrong_and_flagged]
    stats = {
        "everything": make_stats(
            "everything", next_due_date=today, last_wrong_date=today, hard_flag=True
        ),
        "wrong-and-flagged": make_stats(
            "wrong-and-flagged",
            next_due_date=today + dt.timedelta(days=3),
            last_wrong_date=today - dt.timedelta(days=1),
            hard_flag=True,
        ),
    }

    queue = build_daily_queue(corpus, stats, 10, today, rng=rng)

    assert ids(queue.due) == {"everything"}
    assert ids(queue.recently_wrong) == {"wrong-and-flagged"}
    assert queue.hard_flagged == []
    assert queue.total == 2
    placed = [item.id for item in queue.in_priority_order()]
    assert len(placed) == len(set(placed))


def test_hard_flagged_item_not_yet_seen_stays_new(today, rng):
    corpus = [make_item("flagged")]
    stats = {"flagged": make_stats("flagged", times_seen=0, hard_flag=True)}

    queue = build_daily_queue(corpus, stats, 5, today, rng=rng)

    assert queue.hard_flagged == []
    assert ids(queue.new) == {"flagged"}


def test_mixed_review_fills_remaining_budget(today, rng):
    future = today + dt.timedelta(days=10)
    due = [make_item(f"due-{index}") for index in range(2)]
    settled = [make_item(f"settled-{index}") for index in range(10)]
    stats = {item.id: make_stats(item.id, next_due_date=today) for item in due}
    stats.update({item.id: make_stats(item.id, mastery_level=3, next_due_date=future) for item in settled})

    queue = build_daily_queue(due + settled, stats, 5, today, rng=rng)

    assert len(queue.due) == 2
    assert queue.new == []
    assert len(queue.mixed_review) == 3
    assert ids(queue.mixed_review) <= ids(settled)
    assert queue.total == 5


def test_recently_wrong_boundary(today):
    future = today + dt.timedelta(days=5)
    corpus = [make_item("seven"), make_item("eight")]
    stats = {
        "seven": make_stats("seven", next_due_date=future, last_wrong_date=today - dt.timedelta(days=7)),
        "eight": make_stats("eight", next_due_date=future, last_wrong_date=today - dt.timedelta(days=8)),
    }

    buckets = classify(corpus, stats, today)

    assert ids(buckets.recently_wrong) == {"seven"}
    assert ids(buckets.seen_unclassified) == {"eight"}


def test_statistics_without_corpus_item_are_ignored(today, rng):
    corpus = [make_item("kept")]
    stats = {"deleted": make_stats("deleted", next_due_date=today)}

    queue = build_daily_queue(corpus, stats, 5, today, rng=rng)

    assert ids(queue.new) == {"kept"}
    assert queue.due == []
    assert queue.total == 1


def test_same_seed_gives_same_queue(today):
    corpus = [make_item(f"word-{index}", category=f"c{index % 3}") for index in range(40)]

    first = build_daily_queue(corpus, {}, 12, today, rng=random.Random(99))
    second = build_daily_queue(corpus, {}, 12, today, rng=random.Random(99))

    assert [item.id for item in first.new] == [item.id for item in second.new]


def test_daily_goal_must_be_positive(today):
    with pytest.raises(ValueError):
        build_daily_queue([make_item("a")], {}, 0, today)


def test_buckets_are_addressable_by_enum(today, rng):
    corpus = [make_item("due"), make_item("fresh")]
    stats = {"due": make_stats("due", next_due_date=today)}

    queue = build_daily_queue(corpus, stats, 5, today, rng=rng)

    assert ids(queue.bucket(QueueBucket.DUE)) == {"due"}
    assert ids(queue.bucket(QueueBucket.NEW)) == {"fresh"}
    assert [item.id for item in queue.in_priority_order()] == ["due", "fresh"]


def test_session_queue_interleaves_the_daily_queue(today):
    corpus = [make_item(f"food-{index}", "Food") for index in range(4)]
    corpus += [make_item(f"verb-{index}", "Verbs") for index in range(4)]

    session = get_daily_session_queue(corpus, {}, 6, today, rng=random.Random(5))

    assert len(session) == 6
    assert len(ids(session)) == 6
    categories = [item.category for item in session]
    assert categories[:2] in (["Food", "Verbs"], ["Verbs", "Food"])
