"""Task query domain service for the tasks application.

This module contains the TaskQueryService that resolves declarative task
queries into deterministic pages.
"""

import logging
from typing import TYPE_CHECKING

from domain.entities.query import PaginationMetadata, TaskPage, TaskQueryCriteria
from domain.repositories.task_query_repository import TaskQueryRepository

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class TaskQueryService:
    """Domain service for listing tasks.

    Ordering always starts with ``orderIndex`` ascending, so pages only move
    when tasks are manually reordered; the requested sort is a tie-break.
    """

    def __init__(self, query_repository: TaskQueryRepository):
        """Initialize the query service with dependencies.

        Args:
            query_repository (TaskQueryRepository): Repository resolving queries.
        """
        self._query_repository = query_repository

    async def list_tasks(
        self, db_session: "Session", criteria: TaskQueryCriteria
    ) -> TaskPage:
        """Resolve a task query into one page of tasks.

        This method orchestrates the query by:
        1. Delegating filtering, counting and ordering to the repository
        2. Calculating pagination metadata
        3. Returning the page

        A page beyond the last one is not an error: it is empty and carries
        the correct metadata.

        Args:
            db_session (Session): SQLAlchemy database session for this operation.
            criteria (TaskQueryCriteria): Filters, sort and page.

        Returns:
            TaskPage: Tasks of the requested page with pagination metadata.
        """
        logger.info(
            f"Listing tasks q='{criteria.q or ''}' completed={criteria.completed} "
            f"priority={criteria.priority} tag={criteria.tag} "
            f"sort={criteria.sort_by.value}:{criteria.order.value} "
            f"page={criteria.page} size={criteria.page_size}"
        )

        tasks, total = await self._query_repository.query_tasks(db_session, criteria)
        pagination = PaginationMetadata.calculate(
            page=criteria.page, page_size=criteria.page_size, total=total
        )

        logger.info(
            f"Returning {len(tasks)} of {total} tasks "
            f"(page {pagination.page}/{pagination.total_pages})"
        )
        return TaskPage(tasks=tasks, pagination=pagination)
