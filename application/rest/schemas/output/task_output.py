"""Task output schemas for API responses.

This module contains Pydantic models for task-related API responses,
including single tasks, pagination info and task lists.
"""

from datetime import datetime
from typing import List, Optional

from application.rest.schemas.base import CamelModel
from application.rest.schemas.output.tag_output import TagResponse


class TaskResponse(CamelModel):
    """Schema for task data in API responses.

    Example:
        >>> task_response = TaskResponse(
        ...     id="task-uuid-123",
        ...     title="Write report",
        ...     completed=False,
        ...     priority=1,
        ...     order_index=3,
        ...     created_at=datetime.now(),
        ...     updated_at=datetime.now(),
        ...     tags=[]
        ... )
    """

    id: str
    title: str
    description: Optional[str] = None
    completed: bool
    priority: int
    due_date: Optional[datetime] = None
    order_index: int
    created_at: datetime
    updated_at: datetime
    tags: List[TagResponse]


class PaginationInfo(CamelModel):
    """Schema for pagination metadata in API responses.

    Attributes:
        page (int): Current page number (1-indexed).
        page_size (int): Number of tasks per page.
        total (int): Total number of matching tasks across all pages.
        total_pages (int): Total number of pages, zero when nothing matches.
        has_next (bool): Whether there is a next page.
        has_prev (bool): Whether there is a previous page.
    """

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class TaskListMeta(CamelModel):
    pagination: PaginationInfo


class TaskListResponse(CamelModel):
    """Schema for ``GET /tasks``: ``{"data": [...], "meta": {"pagination": {...}}}``."""

    data: List[TaskResponse]
    meta: TaskListMeta
