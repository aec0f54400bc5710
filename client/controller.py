"""Task list controller: ties session state, cache and API together.

Every mutation reports its outcome through a ``Notifier``. On success the
task cache is invalidated and the active list is fetched again; reorder
additionally updates the list optimistically and always refetches.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from client.api import ApiError, TagsApi, TasksApi
from client.models import BulkResult, Tag, Task, TaskPage
from client.query_cache import TAGS_SCOPE, TASKS_SCOPE, CacheKey, QueryCache
from client.reorder import apply_order, compute_reorder, optimistic_update
from client.session_state import UISessionState, build_task_query, filter_by_due_window

logger = logging.getLogger(__name__)

BULK_MESSAGES = {
    "complete": "{count} task(s) marked as completed",
    "incomplete": "{count} task(s) marked as incomplete",
    "delete": "{count} task(s) deleted",
    "setPriority": "Priority updated for {count} task(s)",
    "setTags": "Tags updated for {count} task(s)",
}

# Server rejections and transport failures are reported the same way
MUTATION_ERRORS = (ApiError, httpx.HTTPError)


def describe_error(error: Exception) -> str:
    if isinstance(error, ApiError):
        return error.message
    return str(error) or "Could not reach the server. Please try again."


class Notifier(Protocol):
    """Where user-facing mutation outcomes are reported."""

    def success(self, title: str, description: str) -> None: ...

    def error(self, title: str, description: str) -> None: ...


class LoggingNotifier:
    def success(self, title: str, description: str) -> None:
        logger.info(f"{title}: {description}")

    def error(self, title: str, description: str) -> None:
        logger.error(f"{title}: {description}")


class TaskListController:
    """Drives the task list of one UI session.

    Example:
        >>> controller = TaskListController(TasksApi(http), TagsApi(http), QueryCache(), UISessionState())
        >>> await controller.refresh()
        >>> await controller.reorder(source_id, target_id)
    """

    def __init__(
        self,
        tasks_api: TasksApi,
        tags_api: TagsApi,
        cache: QueryCache,
        state: UISessionState,
        notifier: Optional[Notifier] = None,
        page_size: int = 20,
    ):
        self.tasks_api = tasks_api
        self.tags_api = tags_api
        self.cache = cache
        self.state = state
        self.notifier = notifier or LoggingNotifier()
        self.page = 1
        self.page_size = page_size
        self.active_key: Optional[CacheKey] = None

    def active_query(self):
        return build_task_query(self.state, page=self.page, page_size=self.page_size)

    async def refresh(self) -> Optional[TaskPage]:
        """Fetch the list for the current state.

        A response that arrives after a newer list request was issued is
        discarded and None is returned.
        """
        query = self.active_query()
        token = self.cache.begin_request(TASKS_SCOPE)
        page = await self.tasks_api.list_tasks(query)

        if not self.cache.is_current(TASKS_SCOPE, token):
            logger.info(f"Discarding stale task list response for page {query.page}")
            return None

        self.cache.set(query.key(), page)
        self.active_key = query.key()
        return page

    def current_page(self) -> Optional[TaskPage]:
        if self.active_key is None:
            return None
        return self.cache.get(self.active_key)

    def visible_tasks(self) -> List[Task]:
        """Tasks of the active page after the view's date bucket is applied."""
        page = self.current_page()
        if page is None:
            return []
        return filter_by_due_window(page.tasks, self.state.view_mode)

    async def tags(self) -> List[Tag]:
        key = (TAGS_SCOPE,)
        if self.cache.is_stale(key):
            self.cache.set(key, await self.tags_api.list_tags())
        return self.cache.get(key)

    async def _reconcile(self, tags_changed: bool = False) -> None:
        """Invalidate and refetch after a mutation.

        A failed refetch is logged and the entries stay stale; the mutation
        itself has already been reported.
        """
        self.cache.invalidate(TASKS_SCOPE)
        if tags_changed:
            self.cache.invalidate(TAGS_SCOPE)
        try:
            await self.refresh()
        except MUTATION_ERRORS as e:
            logger.warning(f"Refetching tasks failed, cache left stale: {describe_error(e)}")

    async def create_task(self, data: Dict[str, Any]) -> Task:
        try:
            task = await self.tasks_api.create_task(data)
        except MUTATION_ERRORS as e:
            self.notifier.error("Error creating task", describe_error(e))
            raise
        self.notifier.success("Task created", f'"{task.title}" has been created successfully.')
        await self._reconcile(tags_changed=bool(data.get("tags")))
        return task

    async def update_task(self, task_id: str, data: Dict[str, Any]) -> Task:
        try:
            task = await self.tasks_api.update_task(task_id, data)
        except MUTATION_ERRORS as e:
            self.notifier.error("Error updating task", describe_error(e))
            raise
        self.notifier.success("Task updated", f'"{task.title}" has been updated successfully.')
        await self._reconcile(tags_changed="tags" in data)
        return task

    async def toggle_task(self, task_id: str) -> Task:
        try:
            task = await self.tasks_api.toggle_task(task_id)
        except MUTATION_ERRORS as e:
            self.notifier.error("Error updating task", describe_error(e))
            raise
        action = "completed" if task.completed else "reopened"
        self.notifier.success(f"Task {action}", f'"{task.title}" has been {action}.')
        await self._reconcile()
        return task

    async def delete_task(self, task_id: str) -> None:
        try:
            await self.tasks_api.delete_task(task_id)
        except MUTATION_ERRORS as e:
            self.notifier.error("Error deleting task", describe_error(e))
            raise
        self.notifier.success("Task deleted", "Task has been deleted successfully.")
        await self._reconcile(tags_changed=True)

    async def bulk_action(
        self,
        action: str,
        ids: Optional[List[str]] = None,
        priority: Optional[int] = None,
        tags: Optional[List[str]] = None,
    ) -> BulkResult:
        """Run a bulk action over ``ids``, or over the current selection.

        The selection is cleared once the action succeeds.
        """
        data: Dict[str, Any] = {"action": action, "ids": list(ids or self.state.selected_task_ids)}
        if priority is not None:
            data["priority"] = priority
        if tags is not None:
            data["tags"] = tags

        try:
            result = await self.tasks_api.bulk_action(data)
        except MUTATION_ERRORS as e:
            self.notifier.error("Error performing bulk action", describe_error(e))
            raise

        message = BULK_MESSAGES.get(action, "{count} task(s) updated")
        self.notifier.success("Bulk action completed", message.format(count=result.count))
        self.state.clear_selection()
        await self._reconcile(tags_changed=action in ("setTags", "delete"))
        return result

    async def clear_completed(self) -> int:
        try:
            result = await self.tasks_api.clear_completed()
        except MUTATION_ERRORS as e:
            self.notifier.error("Error clearing completed tasks", describe_error(e))
            raise
        self.notifier.success("Completed tasks cleared", f"{result.count} task(s) deleted")
        await self._reconcile(tags_changed=True)
        return result.count

    async def reorder(self, source_id: str, target_id: Optional[str]) -> bool:
        """Move a task onto another one's position.

        The cached page is re-sorted before the request is sent. If the
        request fails the page is restored to its pre-drag state and the
        error is reported. Either way the list is fetched again.

        Returns:
            bool: False when the drop was a no-op and nothing was sent.
        """
        page = self.current_page()
        if page is None:
            return False

        order = compute_reorder(page.tasks, source_id, target_id)
        if order is None:
            return False
        order_map = {item["id"]: item["orderIndex"] for item in order}

        def reorder_page(cached: TaskPage) -> TaskPage:
            return cached.model_copy(update={"tasks": apply_order(cached.tasks, order_map)})

        try:
            async with optimistic_update(self.cache, self.active_key, reorder_page):
                await self.tasks_api.reorder_tasks(order)
        except MUTATION_ERRORS as e:
            self.notifier.error("Error reordering tasks", describe_error(e))
            await self._reconcile()
            raise

        await self._reconcile()
        return True
