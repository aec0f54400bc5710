"""SQLAlchemy implementation of the task repository.

This module contains the concrete implementation of the TaskRepository
using SQLAlchemy for database operations.
"""

from __future__ import annotations

import logging
import uuid
from typing import Iterable, List, Optional

from domain.entities.bulk import (
    BulkAction,
    BulkResult,
    CompleteTasks,
    DeleteTasks,
    IncompleteTasks,
    SetTaskPriority,
    SetTaskTags,
)
from domain.entities.tag import TagEntity
from domain.entities.task import ReorderPlacement, TaskChanges, TaskEntity
from domain.repositories.task_repository import TaskRepository
from infrastructure.models.associations import task_tags
from infrastructure.models.base import utcnow
from infrastructure.models.tag_orm import TagORM
from infrastructure.models.task_orm import TaskORM
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from utils.config import DEFAULT_TAG_COLOR

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def task_orm_to_entity(task_orm: TaskORM) -> TaskEntity:
    """Convert a TaskORM row, tags loaded, into a TaskEntity."""
    return TaskEntity(
        id=task_orm.id,
        title=task_orm.title,
        description=task_orm.description,
        completed=task_orm.completed,
        priority=task_orm.priority,
        due_date=task_orm.due_date,
        order_index=task_orm.order_index,
        created_at=task_orm.created_at,
        updated_at=task_orm.updated_at,
        tags=[
            TagEntity(id=tag.id, name=tag.name, color=tag.color)
            for tag in task_orm.tags
        ],
    )


class SqlAlchemyTaskRepository(TaskRepository):
    """SQLAlchemy implementation of the task repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session and either commits all of its
    writes or rolls them back.
    """

    async def create_task(self, db_session: Session, task: TaskEntity) -> TaskEntity:
        try:
            max_index = db_session.execute(
                select(func.max(TaskORM.order_index))
            ).scalar()
            db_task = TaskORM(
                title=task.title,
                description=task.description,
                completed=task.completed,
                priority=task.priority,
                due_date=task.due_date,
                order_index=(max_index if max_index is not None else 0) + 1,
            )
            db_session.add(db_task)
            db_session.flush()

            self._replace_tags(db_session, [db_task.id], task.tag_names)

            db_session.commit()
            db_session.refresh(db_task)
            return task_orm_to_entity(db_task)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create task: {str(e)}")
            raise

    async def get_task_by_id(
        self, db_session: Session, task_id: str
    ) -> Optional[TaskEntity]:
        task_orm = db_session.get(TaskORM, task_id)
        return task_orm_to_entity(task_orm) if task_orm else None

    async def update_task(
        self, db_session: Session, task_id: str, changes: TaskChanges
    ) -> Optional[TaskEntity]:
        try:
            db_task = db_session.get(TaskORM, task_id)
            if not db_task:
                return None

            for field_name, value in changes.provided_fields().items():
                setattr(db_task, field_name, value)
            db_task.updated_at = utcnow()

            if changes.replaces_tags():
                self._replace_tags(db_session, [task_id], changes.tags)

            db_session.commit()
            db_session.refresh(db_task)
            return task_orm_to_entity(db_task)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update task {task_id}: {str(e)}")
            raise

    async def toggle_task(
        self, db_session: Session, task_id: str
    ) -> Optional[TaskEntity]:
        try:
            db_task = db_session.get(TaskORM, task_id)
            if not db_task:
                return None

            db_task.completed = not db_task.completed
            db_task.updated_at = utcnow()
            db_session.commit()
            db_session.refresh(db_task)
            return task_orm_to_entity(db_task)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to toggle task {task_id}: {str(e)}")
            raise

    async def delete_task(self, db_session: Session, task_id: str) -> bool:
        try:
            deleted = self._delete_tasks(db_session, [task_id])
            db_session.commit()
            return deleted > 0

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete task {task_id}: {str(e)}")
            raise

    async def reorder_tasks(
        self, db_session: Session, placements: List[ReorderPlacement]
    ) -> Optional[str]:
        try:
            now = utcnow()
            for placement in placements:
                result = db_session.execute(
                    update(TaskORM)
                    .where(TaskORM.id == placement.task_id)
                    .values(order_index=placement.order_index, updated_at=now)
                )
                if result.rowcount == 0:
                    # One unknown id aborts the whole batch
                    db_session.rollback()
                    return placement.task_id

            db_session.commit()
            return None

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to reorder tasks: {str(e)}")
            raise

    async def apply_bulk_action(
        self, db_session: Session, action: BulkAction
    ) -> BulkResult:
        try:
            ids = list(dict.fromkeys(action.ids))

            if isinstance(action, DeleteTasks):
                deleted = self._delete_tasks(db_session, ids)
                db_session.commit()
                return BulkResult(affected=deleted, deleted=True)

            if isinstance(action, SetTaskTags):
                existing_ids = self._existing_ids(db_session, ids)
                self._replace_tags(db_session, existing_ids, action.tags)
                db_session.execute(
                    update(TaskORM)
                    .where(TaskORM.id.in_(existing_ids))
                    .values(updated_at=utcnow())
                )
                db_session.commit()
                return BulkResult(affected=len(existing_ids))

            if isinstance(action, CompleteTasks):
                values = {"completed": True}
            elif isinstance(action, IncompleteTasks):
                values = {"completed": False}
            elif isinstance(action, SetTaskPriority):
                values = {"priority": action.priority}
            else:
                raise TypeError(f"Unsupported bulk action: {type(action).__name__}")

            values["updated_at"] = utcnow()
            result = db_session.execute(
                update(TaskORM).where(TaskORM.id.in_(ids)).values(**values)
            )
            db_session.commit()
            return BulkResult(affected=result.rowcount)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to apply bulk action: {str(e)}")
            raise

    async def delete_completed(self, db_session: Session) -> int:
        try:
            completed_ids = list(
                db_session.execute(
                    select(TaskORM.id).where(TaskORM.completed.is_(True))
                ).scalars()
            )
            deleted = self._delete_tasks(db_session, completed_ids)
            db_session.commit()
            return deleted

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete completed tasks: {str(e)}")
            raise

    def _existing_ids(self, db_session: Session, ids: Iterable[str]) -> List[str]:
        ids = list(ids)
        if not ids:
            return []
        found = set(
            db_session.execute(select(TaskORM.id).where(TaskORM.id.in_(ids))).scalars()
        )
        return [task_id for task_id in ids if task_id in found]

    def _delete_tasks(self, db_session: Session, ids: List[str]) -> int:
        """Delete tasks and their tag associations, returning the task count."""
        if not ids:
            return 0
        db_session.execute(delete(task_tags).where(task_tags.c.task_id.in_(ids)))
        result = db_session.execute(
            delete(TaskORM)
            .where(TaskORM.id.in_(ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def _replace_tags(
        self, db_session: Session, task_ids: List[str], tag_names: List[str]
    ) -> None:
        """Drop every association of the tasks, then link each to every name."""
        if not task_ids:
            return
        db_session.execute(delete(task_tags).where(task_tags.c.task_id.in_(task_ids)))

        tag_ids = [self._ensure_tag(db_session, name) for name in tag_names]
        rows = [
            {"task_id": task_id, "tag_id": tag_id}
            for task_id in task_ids
            for tag_id in tag_ids
        ]
        if rows:
            db_session.execute(insert(task_tags), rows)

    def _ensure_tag(self, db_session: Session, name: str) -> str:
        """Return the id of the tag named ``name``, creating it if needed.

        Where the dialect supports it this is one idempotent
        ``INSERT ... ON CONFLICT DO NOTHING`` inside the caller's transaction.
        """
        dialect = db_session.get_bind().dialect.name
        upsert_insert = _UPSERT_INSERTS.get(dialect)

        if upsert_insert is not None:
            db_session.execute(
                upsert_insert(TagORM.__table__)
                .values(
                    id=str(uuid.uuid4()),
                    name=name,
                    color=DEFAULT_TAG_COLOR,
                    created_at=utcnow(),
                )
                .on_conflict_do_nothing(index_elements=["name"])
            )
        else:
            exists = db_session.execute(
                select(TagORM.id).where(TagORM.name == name)
            ).scalar()
            if exists is None:
                db_session.add(TagORM(name=name, color=DEFAULT_TAG_COLOR))
                db_session.flush()

        return db_session.execute(select(TagORM.id).where(TagORM.name == name)).scalar_one()
