"""SQLAlchemy ORM model for Tag entity.

This module contains the TagORM class that defines the database schema
for tags and handles tag data persistence.

Classes:
    TagORM: SQLAlchemy model for task tags with a unique name and a display color.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SqlAlchemyTagRepository implementation
    - SqlAlchemyTaskRepository (tag upsert by name)
    - Other infrastructure-specific code

    Domain code should use TagEntity instead of this ORM model.
"""

import uuid

from infrastructure.models.base import Base, utcnow
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship


class TagORM(Base):
    """SQLAlchemy ORM model for tags that label tasks.

    Attributes:
        id (str): Primary key, auto-generated UUID string.
        name (str): Tag name, max 50 characters, unique across all tags.
        color (str): Display color name, defaults to "slate".
        created_at (datetime): Timestamp when tag was created.
        tasks (List[TaskORM]): Many-to-many relationship with tasks.

    Table Schema:
        - Table name: 'tags'
        - Primary key: id
        - Unique constraint: name (case-sensitive as stored)

    Example:
        >>> tag_orm = TagORM(name="work", color="blue")
        >>> db.add(tag_orm)
        >>> db.commit()
        >>> print(f"Created tag: {tag_orm.id}")
    """

    __tablename__ = "tags"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Primary key, auto-generated UUID string",
    )

    name = Column(
        String(50),
        unique=True,
        nullable=False,
        comment="Tag name, must be unique across all tags",
    )

    color = Column(
        String(50),
        default="slate",
        nullable=False,
        comment="Display color name",
    )

    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        comment="Timestamp when tag was created",
    )

    tasks = relationship(
        "TaskORM",
        secondary="task_tags",
        back_populates="tags",
        lazy="select",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Human-readable representation of the tag.
        """
        return f"<TagORM(id={self.id}, name='{self.name}', color='{self.color}')>"

    def __str__(self) -> str:
        """User-friendly string representation.

        Returns:
            str: Tag name for display purposes.
        """
        return self.name
