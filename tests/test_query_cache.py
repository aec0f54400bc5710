"""Client query cache."""

from client.query_cache import QueryCache, TaskQuery


def test_task_query_drops_unset_filters():
    query = TaskQuery(q="milk", completed=False)

    assert query.to_params() == {
        "q": "milk",
        "completed": "false",
        "sortBy": "createdAt",
        "order": "desc",
        "page": 1,
        "pageSize": 20,
    }


def test_equal_queries_share_a_key():
    assert TaskQuery(priority=1).key() == TaskQuery(priority=1).key()
    assert TaskQuery(priority=1).key() != TaskQuery(priority=1, page=2).key()
    assert TaskQuery().key()[0] == "tasks"


def test_invalidate_marks_entries_under_prefix():
    cache = QueryCache()
    tasks_key = TaskQuery().key()
    cache.set(tasks_key, ["task"])
    cache.set(("tags",), ["tag"])

    marked = cache.invalidate("tasks")

    assert marked == 1
    assert cache.is_stale(tasks_key)
    assert not cache.is_stale(("tags",))
    assert cache.get(tasks_key) == ["task"]


def test_snapshot_and_restore():
    cache = QueryCache()
    key = ("tasks", "x")
    cache.set(key, [1, 2])
    snapshot = cache.snapshot(key)

    cache.patch(key, lambda value: list(reversed(value)))
    assert cache.get(key) == [2, 1]

    cache.restore(key, snapshot)
    assert cache.get(key) == [1, 2]


def test_restoring_missing_snapshot_removes_entry():
    cache = QueryCache()
    key = ("tasks", "new")
    snapshot = cache.snapshot(key)
    cache.set(key, "speculative")

    cache.restore(key, snapshot)

    assert cache.get(key) is None


def test_only_latest_request_is_current():
    cache = QueryCache()
    first = cache.begin_request("tasks")
    second = cache.begin_request("tasks")

    assert not cache.is_current("tasks", first)
    assert cache.is_current("tasks", second)
    assert cache.is_current("tags", cache.begin_request("tags"))
