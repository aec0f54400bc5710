"""Task domain service for the tasks application.

This module contains the TaskService that orchestrates task mutations:
create, partial update, toggle, delete, bulk actions, clearing completed
tasks and the transactional reorder.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from domain.entities.bulk import BulkAction, BulkResult
from domain.entities.task import (
    DEFAULT_PRIORITY,
    ReorderPlacement,
    TaskChanges,
    TaskEntity,
    normalize_tag_names,
)
from domain.entities.tag import TagEntity

if TYPE_CHECKING:
    from domain.repositories.task_repository import TaskRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base exception for task-related errors."""

    pass


class TaskNotFoundError(TaskError):
    """Exception raised when a task is not found."""

    pass


class TaskTransactionError(TaskError):
    """Exception raised when a multi-row task operation fails and is rolled back."""

    pass


class TaskService:
    """Domain service for handling task mutations.

    Every multi-row operation (bulk actions, reorder, tag replacement) is
    delegated to the repository as a single transaction.
    """

    def __init__(self, task_repository: "TaskRepository"):
        """Initialize the task service with dependencies.

        Args:
            task_repository: Repository for performing task operations
        """
        self._task_repository = task_repository

    async def create_task(
        self,
        db_session: "Session",
        title: str,
        description: Optional[str] = None,
        priority: Optional[int] = None,
        due_date: Optional[datetime] = None,
        tags: Optional[List[str]] = None,
    ) -> TaskEntity:
        """Create a task appended to the end of the manual order.

        Args:
            db_session: Database session for this operation
            title: Task title
            description: Optional description
            priority: Priority 1..3, defaults to 2
            due_date: Optional deadline
            tags: Tag names, resolved or created by name

        Returns:
            TaskEntity: Created task with assigned id and order index

        Raises:
            ValueError: If task data is invalid
            TaskError: If creation fails
        """
        task = TaskEntity(
            id=None,
            title=title,
            description=description,
            priority=priority if priority is not None else DEFAULT_PRIORITY,
            due_date=due_date,
            tags=[TagEntity(id=None, name=name) for name in normalize_tag_names(tags or [])],
        )
        logger.info(f"Creating task with {len(task.tags)} tags")

        try:
            created = await self._task_repository.create_task(db_session, task)
        except Exception as e:
            logger.error(f"Failed to create task: {str(e)}")
            raise TaskError(f"Failed to create task: {str(e)}") from e

        logger.info(f"Created task {created.id} at order index {created.order_index}")
        return created

    async def get_task(self, db_session: "Session", task_id: str) -> TaskEntity:
        """Get a task by id.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        task = await self._task_repository.get_task_by_id(db_session, task_id)
        if not task:
            raise TaskNotFoundError(f"Task {task_id} not found")
        return task

    async def update_task(
        self, db_session: "Session", task_id: str, changes: TaskChanges
    ) -> TaskEntity:
        """Apply a partial update to a task.

        Only supplied fields change. A supplied tag list replaces every
        existing association of the task.

        Args:
            db_session: Database session for this operation
            task_id: Id of the task to update
            changes: Supplied fields

        Returns:
            TaskEntity: Updated task

        Raises:
            TaskNotFoundError: If the task does not exist
            TaskError: If the update fails
        """
        logger.info(
            f"Updating task {task_id} fields={sorted(changes.provided_fields())} "
            f"replace_tags={changes.replaces_tags()}"
        )
        try:
            updated = await self._task_repository.update_task(
                db_session, task_id, changes
            )
        except Exception as e:
            logger.error(f"Failed to update task {task_id}: {str(e)}")
            raise TaskError(f"Failed to update task: {str(e)}") from e

        if not updated:
            raise TaskNotFoundError(f"Task {task_id} not found")
        return updated

    async def toggle_task(self, db_session: "Session", task_id: str) -> TaskEntity:
        """Flip the completion state of a task.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        toggled = await self._task_repository.toggle_task(db_session, task_id)
        if not toggled:
            raise TaskNotFoundError(f"Task {task_id} not found")
        logger.info(f"Task {task_id} completed={toggled.completed}")
        return toggled

    async def delete_task(self, db_session: "Session", task_id: str) -> None:
        """Delete a single task.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        deleted = await self._task_repository.delete_task(db_session, task_id)
        if not deleted:
            raise TaskNotFoundError(f"Task {task_id} not found")
        logger.info(f"Deleted task {task_id}")

    async def reorder_tasks(
        self, db_session: "Session", placements: List[ReorderPlacement]
    ) -> None:
        """Persist a full recomputed manual order in one transaction.

        Args:
            db_session: Database session for this operation
            placements: Every ``{id, orderIndex}`` pair submitted by the client

        Raises:
            ValueError: If no placement is given
            TaskNotFoundError: If any id is unknown; nothing is written
            TaskTransactionError: If the transaction fails for another reason
        """
        if not placements:
            raise ValueError("At least one task is required")

        logger.info(f"Reordering {len(placements)} tasks")
        try:
            missing_id = await self._task_repository.reorder_tasks(
                db_session, placements
            )
        except Exception as e:
            logger.error(f"Reorder transaction failed: {str(e)}")
            raise TaskTransactionError(f"Failed to reorder tasks: {str(e)}") from e

        if missing_id is not None:
            logger.warning(f"Reorder aborted, task {missing_id} does not exist")
            raise TaskNotFoundError(f"Task {missing_id} not found")

    async def bulk_action(
        self, db_session: "Session", action: BulkAction
    ) -> BulkResult:
        """Apply one bulk action to every listed task.

        Unknown ids are skipped; the result counts affected rows only.

        Raises:
            ValueError: If no id is given
            TaskTransactionError: If the transaction fails
        """
        if not action.ids:
            raise ValueError("At least one task ID is required")

        logger.info(f"Bulk {type(action).__name__} over {len(action.ids)} ids")
        try:
            result = await self._task_repository.apply_bulk_action(db_session, action)
        except Exception as e:
            logger.error(f"Bulk action failed: {str(e)}")
            raise TaskTransactionError(f"Failed to apply bulk action: {str(e)}") from e

        logger.info(f"Bulk {type(action).__name__} affected {result.affected} tasks")
        return result

    async def clear_completed(self, db_session: "Session") -> int:
        """Delete every completed task.

        Returns:
            int: Number of tasks deleted
        """
        try:
            deleted = await self._task_repository.delete_completed(db_session)
        except Exception as e:
            logger.error(f"Failed to clear completed tasks: {str(e)}")
            raise TaskTransactionError(
                f"Failed to clear completed tasks: {str(e)}"
            ) from e

        logger.info(f"Cleared {deleted} completed tasks")
        return deleted
