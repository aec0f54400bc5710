"""HTTP client for the Tasks Service REST API.

Both API classes share one ``httpx.AsyncClient`` so that connection pooling,
base URL and timeouts are configured in a single place.

Example:
    >>> async with httpx.AsyncClient(base_url="http://localhost:3001") as http:
    ...     tasks_api = TasksApi(http)
    ...     page = await tasks_api.list_tasks(TaskQuery(priority=1))
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from client.models import BulkResult, Tag, Task, TaskPage
from client.query_cache import TaskQuery

logger = logging.getLogger(__name__)

API_BASE = "/api/v1"


class ApiError(Exception):
    """Raised for every non-2xx response.

    Attributes:
        status (int): HTTP status code.
        message (str): The ``message`` field of the error body when present.
    """

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


async def _request(
    http: httpx.AsyncClient,
    method: str,
    endpoint: str,
    json: Any = None,
    params: Optional[Dict[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    url = f"{API_BASE}{endpoint}"
    logger.debug(f"{method} {url} params={params}")
    response = await http.request(method, url, json=json, params=params)

    if response.is_error:
        try:
            message = response.json().get("message") or f"HTTP {response.status_code}"
        except ValueError:
            message = "Unknown error"
        logger.warning(f"{method} {url} failed with {response.status_code}: {message}")
        raise ApiError(response.status_code, message)

    if response.status_code == httpx.codes.NO_CONTENT or not response.content:
        return None
    return response.json()


class TasksApi:
    """Task endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def list_tasks(self, query: TaskQuery) -> TaskPage:
        body = await _request(self._http, "GET", "/tasks", params=query.to_params())
        return TaskPage(
            tasks=[Task.model_validate(item) for item in body["data"]],
            pagination=body["meta"]["pagination"],
        )

    async def get_task(self, task_id: str) -> Task:
        body = await _request(self._http, "GET", f"/tasks/{task_id}")
        return Task.model_validate(body["data"])

    async def create_task(self, data: Dict[str, Any]) -> Task:
        body = await _request(self._http, "POST", "/tasks", json=data)
        return Task.model_validate(body["data"])

    async def update_task(self, task_id: str, data: Dict[str, Any]) -> Task:
        """Send a partial update; only keys present in ``data`` are changed."""
        body = await _request(self._http, "PATCH", f"/tasks/{task_id}", json=data)
        return Task.model_validate(body["data"])

    async def toggle_task(self, task_id: str) -> Task:
        body = await _request(self._http, "PATCH", f"/tasks/{task_id}/toggle")
        return Task.model_validate(body["data"])

    async def delete_task(self, task_id: str) -> None:
        await _request(self._http, "DELETE", f"/tasks/{task_id}")

    async def reorder_tasks(self, order: List[Dict[str, Any]]) -> bool:
        body = await _request(self._http, "PATCH", "/tasks/reorder", json=order)
        return body["data"]["success"]

    async def bulk_action(self, data: Dict[str, Any]) -> BulkResult:
        body = await _request(self._http, "POST", "/tasks/bulk", json=data)
        return BulkResult.model_validate(body["data"])

    async def clear_completed(self) -> BulkResult:
        body = await _request(self._http, "DELETE", "/tasks/completed")
        return BulkResult.model_validate(body["data"])


class TagsApi:
    """Tag endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def list_tags(self) -> List[Tag]:
        body = await _request(self._http, "GET", "/tags")
        return [Tag.model_validate(item) for item in body["data"]]

    async def get_tag(self, tag_id: str) -> Tag:
        body = await _request(self._http, "GET", f"/tags/{tag_id}")
        return Tag.model_validate(body["data"])

    async def create_tag(self, name: str, color: Optional[str] = None) -> Tag:
        data = {"name": name}
        if color is not None:
            data["color"] = color
        body = await _request(self._http, "POST", "/tags", json=data)
        return Tag.model_validate(body["data"])

    async def update_tag(self, tag_id: str, data: Dict[str, Any]) -> Tag:
        body = await _request(self._http, "PATCH", f"/tags/{tag_id}", json=data)
        return Tag.model_validate(body["data"])

    async def delete_tag(self, tag_id: str) -> None:
        await _request(self._http, "DELETE", f"/tags/{tag_id}")
