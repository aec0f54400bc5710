"""Client-side models for Tasks Service responses.

Responses arrive in camelCase and are parsed into these Pydantic models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ClientModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Tag(ClientModel):
    id: str
    name: str
    color: str
    task_count: Optional[int] = None


class Task(ClientModel):
    id: str
    title: str
    description: Optional[str] = None
    completed: bool
    priority: int
    due_date: Optional[datetime] = None
    order_index: int
    created_at: datetime
    updated_at: datetime
    tags: List[Tag] = Field(default_factory=list)


class Pagination(ClientModel):
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class TaskPage(ClientModel):
    """One page of tasks as returned by ``GET /tasks``."""

    tasks: List[Task]
    pagination: Pagination


class BulkResult(ClientModel):
    success: bool
    updated_count: Optional[int] = None
    deleted_count: Optional[int] = None

    @property
    def count(self) -> int:
        return self.updated_count or self.deleted_count or 0
