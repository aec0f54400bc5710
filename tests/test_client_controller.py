"""Task list controller against the real app and a scripted transport."""

import asyncio

import httpx
import pytest

from client.api import ApiError, TagsApi, TasksApi
from client.controller import TaskListController
from client.query_cache import QueryCache
from client.session_state import UISessionState, ViewMode


class RecordingNotifier:
    def __init__(self, controller=None):
        self.controller = controller
        self.successes = []
        self.errors = []
        self.order_at_error = None

    def success(self, title, description):
        self.successes.append((title, description))

    def error(self, title, description):
        self.errors.append((title, description))
        page = self.controller.current_page() if self.controller else None
        if page is not None:
            self.order_at_error = [task.id for task in page.tasks]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def controller(client, notifier):
    state = UISessionState()
    state.set_filters(sort_by="orderIndex", order="asc")
    controller = TaskListController(
        TasksApi(client), TagsApi(client), QueryCache(), state, notifier=notifier
    )
    notifier.controller = controller
    return controller


async def test_create_notifies_and_refreshes(controller, notifier):
    await controller.refresh()

    task = await controller.create_task({"title": "Write tests", "tags": ["dev"]})

    assert notifier.successes == [
        ("Task created", '"Write tests" has been created successfully.')
    ]
    assert [t.id for t in controller.current_page().tasks] == [task.id]
    assert [tag.name for tag in await controller.tags()] == ["dev"]


async def test_failed_mutation_notifies_and_raises(controller, notifier):
    with pytest.raises(ApiError) as exc_info:
        await controller.toggle_task("missing")

    assert exc_info.value.status == 404
    assert notifier.errors[0][0] == "Error updating task"


async def test_bulk_action_uses_and_clears_selection(controller, notifier):
    first = await controller.create_task({"title": "One"})
    await controller.create_task({"title": "Two"})
    controller.state.toggle_task_selection(first.id)
    controller.state.toggle_task_selection("ghost")

    result = await controller.bulk_action("complete")

    assert result.updated_count == 1
    assert notifier.successes[-1] == (
        "Bulk action completed",
        "1 task(s) marked as completed",
    )
    assert controller.state.selected_task_ids == []


async def test_reorder_persists_new_order(controller):
    a = await controller.create_task({"title": "A"})
    b = await controller.create_task({"title": "B"})
    c = await controller.create_task({"title": "C"})

    moved = await controller.reorder(c.id, a.id)

    assert moved is True
    assert [t.id for t in controller.current_page().tasks] == [c.id, a.id, b.id]
    assert [t.order_index for t in controller.current_page().tasks] == [1, 2, 3]


async def test_reorder_on_later_page_keeps_earlier_pages(client, controller):
    ids = [(await controller.create_task({"title": f"T{n}"})).id for n in range(1, 5)]
    controller.page_size = 2
    controller.page = 2
    await controller.refresh()

    assert await controller.reorder(ids[3], ids[2]) is True

    response = await client.get(
        "/api/v1/tasks", params={"sortBy": "orderIndex", "order": "asc"}
    )
    assert [task["title"] for task in response.json()["data"]] == ["T1", "T2", "T4", "T3"]
    assert [t.id for t in controller.current_page().tasks] == [ids[3], ids[2]]


async def test_reorder_noop_sends_nothing(controller):
    a = await controller.create_task({"title": "A"})

    assert await controller.reorder(a.id, a.id) is False
    assert await controller.reorder(a.id, None) is False


async def test_failed_reorder_rolls_back_before_reporting(client, controller, notifier):
    a = await controller.create_task({"title": "A"})
    b = await controller.create_task({"title": "B"})
    c = await controller.create_task({"title": "C"})
    # Removed behind the controller's back, so the submitted order references it
    await client.delete(f"/api/v1/tasks/{c.id}")

    with pytest.raises(ApiError):
        await controller.reorder(b.id, a.id)

    assert notifier.errors[0][0] == "Error reordering tasks"
    assert notifier.order_at_error == [a.id, b.id, c.id]
    assert [t.id for t in controller.current_page().tasks] == [a.id, b.id]


async def test_visible_tasks_apply_view_window(controller):
    await controller.create_task({"title": "Undated"})
    controller.state.set_view_mode(ViewMode.TODAY)
    await controller.refresh()

    assert controller.visible_tasks() == []


def task_payload(task_id, order_index):
    return {
        "id": task_id,
        "title": task_id,
        "description": None,
        "completed": False,
        "priority": 2,
        "dueDate": None,
        "orderIndex": order_index,
        "createdAt": "2024-01-01T00:00:00",
        "updatedAt": "2024-01-01T00:00:00",
        "tags": [],
    }


def list_payload(task_ids, page):
    return {
        "data": [task_payload(task_id, index) for index, task_id in enumerate(task_ids)],
        "meta": {
            "pagination": {
                "page": page,
                "pageSize": 1,
                "total": 2,
                "totalPages": 2,
                "hasNext": page < 2,
                "hasPrev": page > 1,
            }
        },
    }


def scripted_controller(http, notifier):
    state = UISessionState()
    state.set_filters(sort_by="orderIndex", order="asc")
    controller = TaskListController(
        TasksApi(http), TagsApi(http), QueryCache(), state, notifier=notifier
    )
    notifier.controller = controller
    return controller


async def test_stale_list_response_is_discarded():
    release_first_page = asyncio.Event()

    async def handler(request):
        page = int(request.url.params["page"])
        if page == 1:
            await release_first_page.wait()
            return httpx.Response(200, json=list_payload(["slow"], page))
        return httpx.Response(200, json=list_payload(["fast"], page))

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test"
    ) as http:
        controller = TaskListController(
            TasksApi(http), TagsApi(http), QueryCache(), UISessionState(), page_size=1
        )

        slow = asyncio.create_task(controller.refresh())
        await asyncio.sleep(0)
        controller.page = 2
        fast = await controller.refresh()
        release_first_page.set()
        stale = await slow

    assert stale is None
    assert fast.pagination.page == 2
    assert [t.id for t in controller.current_page().tasks] == ["fast"]


async def test_unreachable_server_during_reorder_is_reported(notifier):
    def handler(request):
        if request.method == "GET" and request.url.path == "/api/v1/tasks":
            return httpx.Response(200, json=list_payload(["a", "b"], 1))
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test"
    ) as http:
        controller = scripted_controller(http, notifier)
        await controller.refresh()

        with pytest.raises(httpx.ConnectError):
            await controller.reorder("b", "a")

    assert notifier.errors == [("Error reordering tasks", "connection refused")]
    assert notifier.order_at_error == ["a", "b"]
    assert [t.id for t in controller.current_page().tasks] == ["a", "b"]


async def test_failed_refetch_after_create_leaves_cache_stale(notifier):
    list_calls = []

    def handler(request):
        if request.method == "POST":
            return httpx.Response(201, json={"data": task_payload("new", 1)})
        list_calls.append(request)
        if len(list_calls) == 1:
            return httpx.Response(200, json=list_payload(["old"], 1))
        return httpx.Response(500, json={"message": "Database unavailable"})

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test"
    ) as http:
        controller = scripted_controller(http, notifier)
        await controller.refresh()

        task = await controller.create_task({"title": "new"})

    assert task.id == "new"
    assert notifier.successes == [("Task created", '"new" has been created successfully.')]
    assert notifier.errors == []
    assert len(list_calls) == 2
    assert controller.cache.is_stale(controller.active_key)
    assert [t.id for t in controller.current_page().tasks] == ["old"]
