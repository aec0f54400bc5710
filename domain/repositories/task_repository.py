"""Task repository interface for the tasks application.

This module defines the repository interface for task mutations
following Domain-Driven Design principles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from domain.entities.bulk import BulkAction, BulkResult
    from domain.entities.task import ReorderPlacement, TaskChanges, TaskEntity
    from sqlalchemy.orm import Session


class TaskRepository(ABC):
    """Abstract repository interface for task operations.

    Every method is one unit of work: it either commits all of its writes or
    none of them. Tag names passed through task writes are resolved with an
    upsert by name inside the same transaction.
    """

    @abstractmethod
    async def create_task(self, db_session: Session, task: TaskEntity) -> TaskEntity:
        """Persist a new task at the end of the manual order.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            task (TaskEntity): New task; its ``order_index`` is ignored and
                assigned as the current maximum plus one

        Returns:
            TaskEntity: Created task with id, timestamps and resolved tags
        """
        pass

    @abstractmethod
    async def get_task_by_id(
        self, db_session: Session, task_id: str
    ) -> Optional[TaskEntity]:
        """Get a task by id, or None when it does not exist."""
        pass

    @abstractmethod
    async def update_task(
        self, db_session: Session, task_id: str, changes: TaskChanges
    ) -> Optional[TaskEntity]:
        """Apply a partial update.

        Returns:
            Optional[TaskEntity]: Updated task, None when the task does not exist
        """
        pass

    @abstractmethod
    async def toggle_task(
        self, db_session: Session, task_id: str
    ) -> Optional[TaskEntity]:
        """Flip the completion flag, None when the task does not exist."""
        pass

    @abstractmethod
    async def delete_task(self, db_session: Session, task_id: str) -> bool:
        """Delete a task and its tag associations.

        Returns:
            bool: True if the task was deleted, False if not found
        """
        pass

    @abstractmethod
    async def reorder_tasks(
        self, db_session: Session, placements: List[ReorderPlacement]
    ) -> Optional[str]:
        """Apply every placement atomically.

        Returns:
            Optional[str]: None on success, otherwise the first unknown task id;
                in that case nothing is written
        """
        pass

    @abstractmethod
    async def apply_bulk_action(
        self, db_session: Session, action: BulkAction
    ) -> BulkResult:
        """Apply a bulk action to the listed tasks, skipping unknown ids."""
        pass

    @abstractmethod
    async def delete_completed(self, db_session: Session) -> int:
        """Delete every completed task and return how many were removed."""
        pass
