"""Tag domain service.

This module contains the TagService that implements business logic
for tag operations, orchestrating between entities and repositories.
"""

import logging
from typing import List, Optional

from domain.entities.tag import TagEntity
from domain.repositories.tag_repository import TagRepository
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class TagError(Exception):
    """Base exception for tag-related errors."""

    pass


class TagNotFoundError(TagError):
    """Exception raised when a requested tag is not found."""

    pass


class TagAlreadyExistsError(TagError):
    """Exception raised when a tag name is already taken by another tag."""

    pass


class TagService:
    """Domain service for tag business operations.

    This service contains the business logic for tag operations,
    coordinating between domain entities and repository interfaces.

    Attributes:
        _tag_repository (TagRepository): Repository for tag data access.

    Example:
        >>> service = TagService(tag_repository)
        >>> tags = await service.get_all_tags(db)
        >>> print([tag.name for tag in tags])
        ['home', 'work']
    """

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize the tag service with required dependencies.

        Args:
            tag_repository (TagRepository): Repository implementation for tag data access.
        """
        self._tag_repository = tag_repository

    async def get_all_tags(self, db_session: Session) -> List[TagEntity]:
        """Retrieve all tags with their task counts.

        Args:
            db_session (Session): Fresh database session for this operation.

        Returns:
            List[TagEntity]: All tag entities sorted by name ascending.
        """
        tags = await self._tag_repository.get_all(db_session)

        # Business rule: tags are listed by name, exactly as stored
        return sorted(tags, key=lambda tag: tag.name)

    async def get_tag_by_id(self, db_session: Session, tag_id: str) -> TagEntity:
        """Retrieve a tag by its unique identifier.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (str): The unique identifier of the tag to retrieve.

        Returns:
            TagEntity: The requested tag entity.

        Raises:
            TagNotFoundError: If the tag with the specified ID does not exist.
        """
        tag = await self._tag_repository.get_by_id(db_session, tag_id)
        if not tag:
            raise TagNotFoundError(f"Tag with ID {tag_id} not found")
        return tag

    async def create_tag(
        self, db_session: Session, name: str, color: Optional[str] = None
    ) -> TagEntity:
        """Create a new tag with the specified name.

        Unlike the implicit upsert used by task writes, an explicit create
        refuses a name that already exists.

        Args:
            db_session (Session): Fresh database session for this operation.
            name (str): The name for the new tag.
            color (Optional[str]): Display color, defaults to "slate".

        Returns:
            TagEntity: The created tag entity with assigned ID.

        Raises:
            TagAlreadyExistsError: If a tag with the same name already exists.
            ValueError: If the tag name is invalid.
        """
        new_tag = TagEntity(id=None, name=name, color=color or "slate")

        # Business rule: tag names are unique (case-sensitive)
        existing_tag = await self._tag_repository.get_by_name(db_session, name)
        if existing_tag:
            logger.warning(f"Refusing duplicate tag name '{name}'")
            raise TagAlreadyExistsError(f"Tag with name '{name}' already exists")

        created = await self._tag_repository.save(db_session, new_tag)
        logger.info(f"Created tag {created.id} ('{created.name}')")
        return created

    async def update_tag(
        self,
        db_session: Session,
        tag_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> TagEntity:
        """Rename and/or recolor an existing tag.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (str): The unique identifier of the tag to update.
            name (Optional[str]): The new name, None to keep it.
            color (Optional[str]): The new color, None to keep it.

        Returns:
            TagEntity: The updated tag entity.

        Raises:
            TagNotFoundError: If the tag with the specified ID does not exist.
            TagAlreadyExistsError: If another tag with the new name already exists.
            ValueError: If the new values are invalid.
        """
        existing_tag = await self.get_tag_by_id(db_session, tag_id)
        updated_tag = existing_tag.with_changes(name=name, color=color)

        if updated_tag.name != existing_tag.name:
            duplicate_tag = await self._tag_repository.get_by_name(
                db_session, updated_tag.name
            )
            if duplicate_tag and duplicate_tag.id != tag_id:
                raise TagAlreadyExistsError(
                    f"Tag with name '{updated_tag.name}' already exists"
                )

        saved = await self._tag_repository.save(db_session, updated_tag)
        logger.info(f"Updated tag {tag_id}")
        return saved

    async def delete_tag(self, db_session: Session, tag_id: str) -> bool:
        """Delete a tag by its unique identifier.

        The tag's task associations are removed; the tasks themselves remain.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (str): The unique identifier of the tag to delete.

        Returns:
            bool: True if the tag was deleted, False if not found.
        """
        deleted = await self._tag_repository.delete(db_session, tag_id)
        if deleted:
            logger.info(f"Deleted tag {tag_id}")
        return deleted
