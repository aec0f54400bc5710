"""Tag repository interface.

This module defines the abstract interface for tag data access
operations, following the Repository pattern from DDD.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.orm import Session

from domain.entities.tag import TagEntity


class TagRepository(ABC):
    """Abstract interface for tag repository operations.

    This interface defines the contract for tag data access
    without coupling to specific database implementations.

    NOTE: All methods receive a fresh database session to ensure
    proper transaction management and avoid session leaks. Returned
    entities carry their computed ``task_count``.
    """

    @abstractmethod
    async def get_all(self, db_session: Session) -> List[TagEntity]:
        """Retrieve all tags from the repository.

        Args:
            db_session (Session): Fresh database session for this operation.

        Returns:
            List[TagEntity]: List of all available tag entities.
        """
        pass

    @abstractmethod
    async def get_by_id(self, db_session: Session, tag_id: str) -> Optional[TagEntity]:
        """Retrieve a tag by its unique identifier.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (str): The unique identifier of the tag to retrieve.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.
        """
        pass

    @abstractmethod
    async def get_by_name(self, db_session: Session, name: str) -> Optional[TagEntity]:
        """Retrieve a tag by its exact name.

        Args:
            db_session (Session): Fresh database session for this operation.
            name (str): The name of the tag to retrieve, compared case-sensitively.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.
        """
        pass

    @abstractmethod
    async def save(self, db_session: Session, tag: TagEntity) -> TagEntity:
        """Save a tag entity to the repository.

        For new tags (id is None), this will create a new record.
        For existing tags, this will update the existing record.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag (TagEntity): The tag entity to save.

        Returns:
            TagEntity: The saved tag entity with populated ID.

        Raises:
            TagAlreadyExistsError: If the name collides with another tag.
        """
        pass

    @abstractmethod
    async def delete(self, db_session: Session, tag_id: str) -> bool:
        """Delete a tag and its task associations, keeping the tasks.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (str): The unique identifier of the tag to delete.

        Returns:
            bool: True if the tag was deleted, False if not found.
        """
        pass
