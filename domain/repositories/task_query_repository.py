"""Task query repository interface for the tasks application.

This module defines the repository interface for resolving task queries.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from domain.entities.query import TaskQueryCriteria
    from domain.entities.task import TaskEntity
    from sqlalchemy.orm import Session


class TaskQueryRepository(ABC):
    """Abstract repository interface for task list queries."""

    @abstractmethod
    async def query_tasks(
        self, db_session: "Session", criteria: "TaskQueryCriteria"
    ) -> Tuple[List["TaskEntity"], int]:
        """Resolve a task query.

        Args:
            db_session (Session): SQLAlchemy database session for this operation.
            criteria (TaskQueryCriteria): Filters, ordering and page.

        Returns:
            Tuple[List[TaskEntity], int]: A tuple containing:
                - The tasks of the requested page, tags resolved
                - Total count of tasks matching the filters (ignoring pagination)
        """
        pass
