"""Task input schemas for API requests.

This module contains Pydantic models for task-related API requests:
creation, partial update, bulk actions and reorder batches.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field, RootModel, model_validator

from application.rest.schemas.base import CamelModel

Priority = Annotated[int, Field(ge=1, le=3)]
TagName = Annotated[str, Field(min_length=1, max_length=50)]
TaskIds = Annotated[List[str], Field(min_length=1)]


class TaskCreate(CamelModel):
    """Schema for creating a new task.

    Attributes:
        title (str): Required, 1..500 characters.
        description (str, optional): At most 2000 characters.
        priority (int): 1..3, defaults to 2; numeric strings are coerced.
        due_date (datetime, optional): ISO-8601 datetime.
        tags (List[str]): Tag names, created on first use.

    Example:
        >>> task_data = TaskCreate(title="Buy milk", priority="1", tags=["home"])
    """

    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Priority = 2
    due_date: Optional[datetime] = None
    tags: List[TagName] = Field(default_factory=list)


class TaskUpdate(CamelModel):
    """Schema for a partial task update.

    Only fields present in the body are applied. ``description`` and
    ``dueDate`` accept null to clear them; ``tags`` replaces the whole set.

    Example:
        >>> update_data = TaskUpdate(description=None)
        >>> update_data.model_fields_set
        {'description'}
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None
    tags: Optional[List[TagName]] = None

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        """Title, priority and tags may be omitted but never set to null."""
        for field_name in ("title", "priority", "tags"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self


class CompleteAction(CamelModel):
    action: Literal["complete"]
    ids: TaskIds


class IncompleteAction(CamelModel):
    action: Literal["incomplete"]
    ids: TaskIds


class SetPriorityAction(CamelModel):
    action: Literal["setPriority"]
    ids: TaskIds
    priority: Priority


class SetTagsAction(CamelModel):
    action: Literal["setTags"]
    ids: TaskIds
    tags: List[TagName]


class DeleteAction(CamelModel):
    action: Literal["delete"]
    ids: TaskIds


BulkActionBody = Annotated[
    Union[CompleteAction, IncompleteAction, SetPriorityAction, SetTagsAction, DeleteAction],
    Field(discriminator="action"),
]


class BulkActionRequest(RootModel[BulkActionBody]):
    """Schema for ``POST /tasks/bulk``.

    The ``action`` field selects the variant; ``setPriority`` requires
    ``priority`` and ``setTags`` requires ``tags``.

    Example:
        >>> BulkActionRequest.model_validate({"action": "complete", "ids": ["a"]})
    """


class ReorderItem(CamelModel):
    """One ``{id, orderIndex}`` pair of a reorder batch."""

    id: str = Field(..., min_length=1)
    order_index: int


class ReorderRequest(RootModel[Annotated[List[ReorderItem], Field(min_length=1)]]):
    """Schema for ``PATCH /tasks/reorder``: the full recomputed order.

    Example:
        >>> ReorderRequest.model_validate([{"id": "a", "orderIndex": 0}])
    """
