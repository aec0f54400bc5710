"""Task converters for transforming between Pydantic schemas and domain objects.

This module contains converter functions for transforming task objects
between the API layer (Pydantic) and the domain layer (entities).
"""

from datetime import datetime, timezone
from typing import List, Optional

from application.converters.tag_converter import TagConverter
from application.rest.schemas.input.task_input import (
    BulkActionRequest,
    ReorderRequest,
    TaskUpdate,
)
from application.rest.schemas.output.task_output import (
    PaginationInfo,
    TaskListMeta,
    TaskListResponse,
    TaskResponse,
)
from domain.entities.bulk import (
    BulkAction,
    CompleteTasks,
    DeleteTasks,
    IncompleteTasks,
    SetTaskPriority,
    SetTaskTags,
)
from domain.entities.query import TaskPage
from domain.entities.task import ReorderPlacement, TaskChanges, TaskEntity


def to_storage_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize an incoming datetime to naive UTC, the stored representation."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskConverter:
    """Converter class for task transformations between layers.

    Example:
        >>> changes = TaskConverter.update_input_to_changes(TaskUpdate(priority=1))
        >>> response = TaskConverter.entity_to_response(task_entity)
    """

    @staticmethod
    def update_input_to_changes(task_update: TaskUpdate) -> TaskChanges:
        """Convert a partial TaskUpdate into TaskChanges.

        Only fields present in the request body are carried over, so an
        explicit null can be told apart from an omitted field.

        Args:
            task_update (TaskUpdate): Validated request body.

        Returns:
            TaskChanges: Domain value with every omitted field left unset.
        """
        values = {
            name: getattr(task_update, name) for name in task_update.model_fields_set
        }
        if "due_date" in values:
            values["due_date"] = to_storage_datetime(values["due_date"])
        return TaskChanges(**values)

    @staticmethod
    def bulk_input_to_action(bulk_request: BulkActionRequest) -> BulkAction:
        """Convert the discriminated bulk request into its domain action.

        Raises:
            ValueError: If the action is not supported.
        """
        body = bulk_request.root
        if body.action == "complete":
            return CompleteTasks(ids=body.ids)
        if body.action == "incomplete":
            return IncompleteTasks(ids=body.ids)
        if body.action == "setPriority":
            return SetTaskPriority(ids=body.ids, priority=body.priority)
        if body.action == "setTags":
            return SetTaskTags(ids=body.ids, tags=body.tags)
        if body.action == "delete":
            return DeleteTasks(ids=body.ids)
        raise ValueError(f"Unsupported bulk action: {body.action}")

    @staticmethod
    def reorder_input_to_placements(
        reorder_request: ReorderRequest,
    ) -> List[ReorderPlacement]:
        return [
            ReorderPlacement(task_id=item.id, order_index=item.order_index)
            for item in reorder_request.root
        ]

    @staticmethod
    def entity_to_response(task_entity: TaskEntity) -> TaskResponse:
        """Convert TaskEntity domain object to TaskResponse Pydantic schema.

        Raises:
            ValueError: If the task entity has no ID (not persisted).
        """
        if task_entity.is_new():
            raise ValueError("Cannot convert new task entity to response (no ID)")

        return TaskResponse(
            id=task_entity.id,
            title=task_entity.title,
            description=task_entity.description,
            completed=task_entity.completed,
            priority=task_entity.priority,
            due_date=task_entity.due_date,
            order_index=task_entity.order_index,
            created_at=task_entity.created_at,
            updated_at=task_entity.updated_at,
            tags=[
                TagConverter.entity_to_response(tag, include_count=False)
                for tag in task_entity.tags
            ],
        )

    @staticmethod
    def page_to_response(task_page: TaskPage) -> TaskListResponse:
        """Convert a TaskPage into the list response with pagination metadata."""
        pagination = task_page.pagination
        return TaskListResponse(
            data=[TaskConverter.entity_to_response(task) for task in task_page.tasks],
            meta=TaskListMeta(
                pagination=PaginationInfo(
                    page=pagination.page,
                    page_size=pagination.page_size,
                    total=pagination.total,
                    total_pages=pagination.total_pages,
                    has_next=pagination.has_next,
                    has_prev=pagination.has_prev,
                )
            ),
        )
