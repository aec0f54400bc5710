"""SQLAlchemy implementation of the task query repository.

This module contains the concrete implementation of the TaskQueryRepository
using SQLAlchemy for filtering, counting, ordering and paginating tasks.
"""

import logging
from typing import List, Tuple

from domain.entities.query import SortField, SortOrder, TaskQueryCriteria
from domain.entities.task import TaskEntity
from domain.repositories.task_query_repository import TaskQueryRepository
from infrastructure.models.tag_orm import TagORM
from infrastructure.models.task_orm import TaskORM
from infrastructure.repositories.sqlalchemy_task_repository import task_orm_to_entity
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, selectinload

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    SortField.CREATED_AT: TaskORM.created_at,
    SortField.DUE_DATE: TaskORM.due_date,
    SortField.PRIORITY: TaskORM.priority,
    SortField.ORDER_INDEX: TaskORM.order_index,
}


class SqlAlchemyTaskQueryRepository(TaskQueryRepository):
    """SQLAlchemy implementation of the task query repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.
    """

    async def query_tasks(
        self, db_session: Session, criteria: TaskQueryCriteria
    ) -> Tuple[List[TaskEntity], int]:
        """Filter, count, order and paginate tasks.

        Args:
            db_session (Session): SQLAlchemy database session for this operation.
            criteria (TaskQueryCriteria): The query containing all parameters.

        Returns:
            Tuple[List[TaskEntity], int]: A tuple containing:
                - Task entities of the requested page
                - Total count of tasks matching the filters
        """
        try:
            base_query = self._apply_filters(db_session.query(TaskORM), criteria)

            # Total ignores pagination
            total_count = base_query.order_by(None).count()

            task_orms = (
                self._apply_ordering(base_query, criteria)
                .options(selectinload(TaskORM.tags))
                .offset(criteria.offset)
                .limit(criteria.page_size)
                .all()
            )

            tasks = [task_orm_to_entity(task_orm) for task_orm in task_orms]
            return tasks, total_count

        except Exception as e:
            logger.error(f"Task query failed: {str(e)}")
            raise

    def _apply_filters(self, query: Query, criteria: TaskQueryCriteria) -> Query:
        """Build the predicate conjunction from the provided filters.

        Args:
            query: Base SQLAlchemy query over TaskORM
            criteria: Query containing the filters

        Returns:
            Query: The filtered query
        """
        if criteria.has_text_search():
            query = query.filter(
                or_(
                    TaskORM.title.icontains(criteria.q, autoescape=True),
                    TaskORM.description.icontains(criteria.q, autoescape=True),
                )
            )

        if criteria.completed is not None:
            query = query.filter(TaskORM.completed.is_(criteria.completed))

        if criteria.priority is not None:
            query = query.filter(TaskORM.priority == criteria.priority)

        if criteria.has_tag_filter():
            # EXISTS keeps one row per task however many tags match
            query = query.filter(TaskORM.tags.any(TagORM.name == criteria.tag))

        return query

    def _apply_ordering(self, query: Query, criteria: TaskQueryCriteria) -> Query:
        """Order by orderIndex first, then the requested sort, then id.

        Args:
            query: Filtered SQLAlchemy query
            criteria: Query containing the sort settings

        Returns:
            Query: The ordered query
        """
        order_by = [TaskORM.order_index.asc()]

        if criteria.needs_secondary_sort():
            column = SORT_COLUMNS[criteria.sort_by]
            order_by.append(
                column.asc() if criteria.order == SortOrder.ASC else column.desc()
            )

        order_by.append(TaskORM.id.asc())
        return query.order_by(*order_by)
