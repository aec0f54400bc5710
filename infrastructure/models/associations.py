"""Association tables for many-to-many relationships in SQLAlchemy ORM.

This module defines the association tables that are used to create many-to-many
relationships between entities in the database.

Tables:
    task_tags: Associates tasks with tags (many-to-many relationship)

Architecture:
    These association tables are part of the Infrastructure layer. Rows are
    written directly by the task repository because a task's tag set is always
    replaced as a whole.
"""

from infrastructure.models.base import Base
from sqlalchemy import Column, ForeignKey, String, Table

task_tags = Table(
    "task_tags",
    Base.metadata,
    Column(
        "task_id",
        String(36),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(36),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table for many-to-many relationship between tasks and tags",
)
