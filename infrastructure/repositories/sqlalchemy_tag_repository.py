"""SQLAlchemy implementation of the tag repository.

This module contains the concrete implementation of TagRepository
using SQLAlchemy for database operations and entity mapping.
"""

import logging
from typing import List, Optional

from domain.entities.tag import TagEntity
from domain.repositories.tag_repository import TagRepository
from domain.services.tag_service import TagAlreadyExistsError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from infrastructure.models.associations import task_tags
from infrastructure.models.tag_orm import TagORM

logger = logging.getLogger(__name__)


class SqlAlchemyTagRepository(TagRepository):
    """SQLAlchemy implementation of the tag repository.

    This class implements the TagRepository using SQLAlchemy
    for database operations. It handles the conversion between domain
    entities and SQLAlchemy models, and computes each tag's task count.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.

    Example:
        >>> repository = SqlAlchemyTagRepository()
        >>> tags = await repository.get_all(db)
        >>> print(tags[0].task_count)
        3
    """

    async def get_all(self, db_session: Session) -> List[TagEntity]:
        """Retrieve all tags with their task counts.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.

        Returns:
            List[TagEntity]: List of all available tag entities.
        """
        rows = db_session.execute(
            select(TagORM, self._task_count_column()).order_by(TagORM.name)
        ).all()
        return [self._model_to_entity(tag, count) for tag, count in rows]

    async def get_by_id(self, db_session: Session, tag_id: str) -> Optional[TagEntity]:
        """Retrieve a tag by its unique identifier.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            tag_id (str): The unique identifier of the tag to retrieve.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.
        """
        row = db_session.execute(
            select(TagORM, self._task_count_column()).where(TagORM.id == tag_id)
        ).first()
        return self._model_to_entity(*row) if row else None

    async def get_by_name(self, db_session: Session, name: str) -> Optional[TagEntity]:
        """Retrieve a tag by its exact, case-sensitive name.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            name (str): The name of the tag to retrieve.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.
        """
        row = db_session.execute(
            select(TagORM, self._task_count_column()).where(TagORM.name == name)
        ).first()
        return self._model_to_entity(*row) if row else None

    async def save(self, db_session: Session, tag: TagEntity) -> TagEntity:
        """Save a tag entity to the database.

        For new tags (id is None), this will create a new record.
        For existing tags, this will update name and color.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            tag (TagEntity): The tag entity to save.

        Returns:
            TagEntity: The saved tag entity with populated ID and task count.

        Raises:
            TagAlreadyExistsError: If the unique name constraint is violated.
        """
        try:
            if tag.is_new():
                tag_model = TagORM(name=tag.name, color=tag.color)
                db_session.add(tag_model)
            else:
                tag_model = db_session.get(TagORM, tag.id)
                if tag_model is None:
                    tag_model = TagORM(id=tag.id, name=tag.name, color=tag.color)
                    db_session.add(tag_model)
                else:
                    tag_model.name = tag.name
                    tag_model.color = tag.color
            db_session.commit()
        except IntegrityError as e:
            db_session.rollback()
            logger.warning(f"Tag name '{tag.name}' violates uniqueness: {str(e)}")
            raise TagAlreadyExistsError(
                f"Tag with name '{tag.name}' already exists"
            ) from e
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to save tag '{tag.name}': {str(e)}")
            raise

        return await self.get_by_id(db_session, tag_model.id)

    async def delete(self, db_session: Session, tag_id: str) -> bool:
        """Delete a tag and its task associations.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            tag_id (str): The unique identifier of the tag to delete.

        Returns:
            bool: True if the tag was deleted, False if not found.
        """
        try:
            tag_model = db_session.get(TagORM, tag_id)
            if not tag_model:
                return False
            db_session.execute(delete(task_tags).where(task_tags.c.tag_id == tag_id))
            db_session.delete(tag_model)
            db_session.commit()
            return True
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete tag {tag_id}: {str(e)}")
            raise

    def _task_count_column(self):
        """Correlated count of task associations for the selected tag."""
        return (
            select(func.count(task_tags.c.task_id))
            .where(task_tags.c.tag_id == TagORM.id)
            .correlate(TagORM)
            .scalar_subquery()
            .label("task_count")
        )

    def _model_to_entity(self, tag_model: TagORM, task_count: int = 0) -> TagEntity:
        """Convert SQLAlchemy model to domain entity.

        Args:
            tag_model (TagORM): SQLAlchemy tag model instance.
            task_count (int): Number of tasks associated with the tag.

        Returns:
            TagEntity: Corresponding domain entity.
        """
        return TagEntity(
            id=tag_model.id,
            name=tag_model.name,
            color=tag_model.color,
            task_count=task_count or 0,
        )
