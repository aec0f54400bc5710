"""UI session state, query building and persistence."""

from datetime import datetime, timedelta, timezone

from client.models import Task
from client.session_state import (
    FilterState,
    JsonSessionStateStore,
    UISessionState,
    ViewMode,
    build_task_query,
    filter_by_due_window,
)


def make_task(task_id, due_date):
    now = datetime(2024, 1, 1)
    return Task(
        id=task_id,
        title=task_id,
        completed=False,
        priority=2,
        due_date=due_date,
        order_index=0,
        created_at=now,
        updated_at=now,
    )


def test_view_mode_presets_reset_filters():
    state = UISessionState()
    state.set_filters(search="report", tag="work")

    state.set_view_mode(ViewMode.HIGH_PRIORITY)

    assert state.view_mode == ViewMode.HIGH_PRIORITY
    assert state.filters == FilterState(priority=1, completed=False)

    state.set_view_mode("completed")
    assert state.filters == FilterState(completed=True)

    state.set_view_mode(ViewMode.ALL)
    assert state.filters == FilterState()


def test_build_task_query_drops_empty_search():
    state = UISessionState()
    state.set_filters(search="", tag="work", sort_by="priority", order="asc")

    query = build_task_query(state, page=2, page_size=10)

    assert query.q is None
    assert query.tag == "work"
    assert query.completed is None
    assert query.to_params()["sortBy"] == "priority"
    assert (query.page, query.page_size) == (2, 10)


def test_view_mode_overrides_user_filters():
    state = UISessionState()
    state.set_view_mode(ViewMode.COMPLETED)
    state.set_filters(completed=False)

    assert build_task_query(state).completed is True


def test_selection_toggles():
    state = UISessionState()
    state.toggle_task_selection("a")
    state.toggle_task_selection("b")
    state.toggle_task_selection("a")

    assert state.selected_task_ids == ["b"]
    state.clear_selection()
    assert state.selected_task_ids == []


def test_today_window_includes_overdue_and_excludes_undated():
    now = datetime(2024, 6, 15, 12, 0)
    tasks = [
        make_task("overdue", now - timedelta(days=2)),
        make_task("today", now + timedelta(hours=3)),
        make_task("later", now + timedelta(days=3)),
        make_task("undated", None),
    ]

    visible = filter_by_due_window(tasks, ViewMode.TODAY, now=now, tz=timezone.utc)

    assert [task.id for task in visible] == ["overdue", "today"]


def test_upcoming_window_includes_undated():
    now = datetime(2024, 6, 15, 12, 0)
    tasks = [
        make_task("tomorrow", now + timedelta(hours=20)),
        make_task("later", now + timedelta(days=3)),
        make_task("undated", None),
    ]

    visible = filter_by_due_window(tasks, ViewMode.UPCOMING, now=now, tz=timezone.utc)

    assert [task.id for task in visible] == ["later", "undated"]


def test_today_window_uses_the_given_zone_calendar_day():
    # 02:00 UTC is still the previous evening at UTC-5
    now = datetime(2024, 6, 15, 2, 0, tzinfo=timezone.utc)
    tasks = [make_task("morning", datetime(2024, 6, 15, 10, 0))]

    eastern = filter_by_due_window(
        tasks, ViewMode.TODAY, now=now, tz=timezone(timedelta(hours=-5))
    )
    utc = filter_by_due_window(tasks, ViewMode.TODAY, now=now, tz=timezone.utc)

    assert eastern == []
    assert [task.id for task in utc] == ["morning"]


def test_json_store_round_trips_view_and_filters(tmp_path):
    store = JsonSessionStateStore(tmp_path / "state" / "session.json")
    state = UISessionState()
    state.set_view_mode(ViewMode.TODAY)
    state.set_filters(search="milk")
    state.toggle_task_selection("a")

    store.save(state)
    loaded = store.load()

    assert loaded.view_mode == ViewMode.TODAY
    assert loaded.filters == state.filters
    assert loaded.selected_task_ids == []


def test_json_store_defaults_when_missing_or_corrupt(tmp_path):
    path = tmp_path / "session.json"
    assert JsonSessionStateStore(path).load() == UISessionState()

    path.write_text("{not json")
    assert JsonSessionStateStore(path).load() == UISessionState()
