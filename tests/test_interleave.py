from vocab_scheduler.core.queue import interleave_by_category
from tests.conftest import make_item


def test_round_robin_across_categories():
    items = [
        make_item("a1", "A"),
        make_item("a2", "A"),
        make_item("b1", "B"),
        make_item("a3", "A"),
        make_item("c1", "C"),
        make_item("c2", "C"),
    ]

    result = interleave_by_category(items)

    assert [item.id for item in result] == ["a1", "b1", "c1", "a2", "c2", "a3"]


def test_single_category_keeps_order():
    items = [make_item(f"w{index}", "Food") for index in range(4)]

    assert interleave_by_category(items) == items


def test_empty_input():
    assert interleave_by_category([]) == []
