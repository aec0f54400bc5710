"""SQLAlchemy ORM model for Task entity.

This module contains the TaskORM class that defines the database schema
for tasks and handles task data persistence.

Classes:
    TaskORM: SQLAlchemy model for tasks with ordering, completion state and tags.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SqlAlchemyTaskRepository and SqlAlchemyTaskQueryRepository
    - The seed routine
    - Other infrastructure-specific code

    Domain code should use TaskEntity instead of this ORM model.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from infrastructure.models.base import Base, utcnow


class TaskORM(Base):
    """SQLAlchemy ORM model for tasks.

    Attributes:
        id (str): Primary key, auto-generated UUID string.
        title (str): Task title, max 500 characters.
        description (str): Optional description, max 2000 characters.
        completed (bool): Completion flag, defaults to False.
        priority (int): 1 (highest urgency) to 3, defaults to 2.
        due_date (datetime): Optional deadline.
        order_index (int): Position in the manual (drag and drop) order.
        created_at (datetime): Timestamp when task was created.
        updated_at (datetime): Timestamp when task was last updated.
        tags (List[TagORM]): Many-to-many relationship with tags.

    Table Schema:
        - Table name: 'tasks'
        - Primary key: id
        - Indexes: order_index, completed, priority

    Example:
        >>> task_orm = TaskORM(title="Buy milk", order_index=1)
        >>> db.add(task_orm)
        >>> db.commit()
    """

    __tablename__ = "tasks"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Primary key, auto-generated UUID string",
    )

    title = Column(String(500), nullable=False, comment="Task title")

    description = Column(Text, nullable=True, comment="Optional task description")

    completed = Column(
        Boolean, default=False, nullable=False, index=True, comment="Completion flag"
    )

    priority = Column(
        Integer,
        default=2,
        nullable=False,
        index=True,
        comment="Priority, 1 is the most urgent",
    )

    due_date = Column(DateTime, nullable=True, comment="Optional deadline")

    # Manual ordering backbone, values need not be contiguous
    order_index = Column(
        Integer,
        default=0,
        nullable=False,
        index=True,
        comment="Position in the manual ordering",
    )

    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        comment="Timestamp when task was created",
    )

    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when task was last updated",
    )

    tags = relationship(
        "TagORM",
        secondary="task_tags",
        back_populates="tasks",
        lazy="select",
        order_by="TagORM.name",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<TaskORM(id={self.id}, title='{self.title}', "
            f"order_index={self.order_index}, completed={self.completed})>"
        )

    def __str__(self) -> str:
        return self.title
