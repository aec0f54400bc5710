"""Reorder computation and the optimistic update protocol."""

from datetime import datetime

import pytest

from client.models import Task
from client.query_cache import QueryCache
from client.reorder import apply_order, compute_reorder, optimistic_update


def make_task(task_id, order_index):
    now = datetime(2024, 1, 1)
    return Task(
        id=task_id,
        title=task_id.upper(),
        completed=False,
        priority=2,
        order_index=order_index,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def tasks():
    return [make_task("a", 0), make_task("b", 1), make_task("c", 2)]


def test_moving_last_to_first_renumbers_everything(tasks):
    order = compute_reorder(tasks, source_id="c", target_id="a")

    assert order == [
        {"id": "c", "orderIndex": 0},
        {"id": "a", "orderIndex": 1},
        {"id": "b", "orderIndex": 2},
    ]


def test_moving_down(tasks):
    order = compute_reorder(tasks, source_id="a", target_id="c")

    assert [item["id"] for item in order] == ["b", "c", "a"]


def test_later_page_reuses_its_own_indices():
    page = [make_task("c", 7), make_task("d", 8), make_task("e", 12)]

    order = compute_reorder(page, source_id="e", target_id="c")

    assert order == [
        {"id": "e", "orderIndex": 7},
        {"id": "c", "orderIndex": 8},
        {"id": "d", "orderIndex": 12},
    ]


def test_equal_indices_are_spread_apart():
    page = [make_task("a", 3), make_task("b", 3), make_task("c", 3)]

    order = compute_reorder(page, source_id="c", target_id="a")

    assert [(item["id"], item["orderIndex"]) for item in order] == [
        ("c", 3),
        ("a", 4),
        ("b", 5),
    ]


@pytest.mark.parametrize(
    "source_id,target_id", [("a", "a"), ("a", None), ("a", "zzz"), ("zzz", "a")]
)
def test_noop_drops(tasks, source_id, target_id):
    assert compute_reorder(tasks, source_id, target_id) is None


def test_apply_order_falls_back_to_previous_index(tasks):
    reordered = apply_order(tasks, {"c": 0, "a": 1})

    assert [(task.id, task.order_index) for task in reordered] == [
        ("c", 0),
        ("a", 1),
        ("b", 1),
    ]
    assert tasks[2].order_index == 2


async def test_optimistic_update_keeps_patch_on_success(tasks):
    cache = QueryCache()
    key = ("tasks", "list")
    cache.set(key, tasks)

    async with optimistic_update(cache, key, lambda value: list(reversed(value))):
        assert [task.id for task in cache.get(key)] == ["c", "b", "a"]

    assert [task.id for task in cache.get(key)] == ["c", "b", "a"]


async def test_optimistic_update_restores_snapshot_on_failure(tasks):
    cache = QueryCache()
    key = ("tasks", "list")
    cache.set(key, tasks)

    with pytest.raises(RuntimeError):
        async with optimistic_update(cache, key, lambda value: value[:1]):
            assert len(cache.get(key)) == 1
            raise RuntimeError("server rejected the order")

    assert [task.id for task in cache.get(key)] == ["a", "b", "c"]
