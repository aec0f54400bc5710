"""Task domain entity for the tasks application.

This module contains the core Task domain entity together with the value
objects used to change tasks: partial updates and reorder placements.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from domain.entities.tag import TagEntity

TITLE_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000
MIN_PRIORITY = 1
MAX_PRIORITY = 3
DEFAULT_PRIORITY = 2


def validate_title(title: str) -> str:
    # Whitespace-only titles are kept as typed
    if not title:
        raise ValueError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    return title


def validate_description(description: Optional[str]) -> Optional[str]:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
        )
    return description


def validate_priority(priority: int) -> int:
    if priority is None or not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise ValueError(
            f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}"
        )
    return priority


def normalize_tag_names(names: List[str]) -> List[str]:
    """Drop duplicate tag names, keeping the first occurrence.

    Args:
        names (List[str]): Tag names as supplied by the caller.

    Returns:
        List[str]: Unique names in their original order.

    Raises:
        ValueError: If any name is empty or longer than a tag name may be.
    """
    unique: List[str] = []
    for name in names:
        # Reuse the tag entity rules for every referenced name
        TagEntity(id=None, name=name)
        if name not in unique:
            unique.append(name)
    return unique


@dataclass
class TaskEntity:
    """Domain entity representing a task.

    Attributes:
        id (Optional[str]): Unique identifier, None until persisted.
        title (str): Non-empty title, at most 500 characters.
        description (Optional[str]): Optional text, at most 2000 characters.
        completed (bool): Completion state.
        priority (int): 1 (highest urgency) to 3.
        due_date (Optional[datetime]): Deadline, None means no deadline.
        order_index (int): Position in the manual ordering.
        created_at (Optional[datetime]): Set by the store on insert.
        updated_at (Optional[datetime]): Set by the store on every mutation.
        tags (List[TagEntity]): Associated tags.
    """

    id: Optional[str]
    title: str
    description: Optional[str] = None
    completed: bool = False
    priority: int = DEFAULT_PRIORITY
    due_date: Optional[datetime] = None
    order_index: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: List[TagEntity] = field(default_factory=list)

    def __post_init__(self):
        validate_title(self.title)
        validate_description(self.description)
        validate_priority(self.priority)

    def is_new(self) -> bool:
        return self.id is None

    @property
    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags]


class _Unset:
    """Marker for a field that was not supplied in a partial update."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class TaskChanges:
    """Partial update of a task.

    Fields left as ``UNSET`` are not touched. ``description`` and ``due_date``
    may be set to None to clear them; ``tags`` replaces the whole tag set.

    Example:
        >>> changes = TaskChanges(description=None)
        >>> changes.provided_fields()
        {'description': None}
    """

    title: Any = UNSET
    description: Any = UNSET
    priority: Any = UNSET
    due_date: Any = UNSET
    tags: Any = UNSET

    def __post_init__(self):
        if self.title is not UNSET:
            validate_title(self.title)
        if self.description is not UNSET:
            validate_description(self.description)
        if self.priority is not UNSET:
            validate_priority(self.priority)
        if self.tags is not UNSET:
            if self.tags is None:
                raise ValueError("Tags cannot be null")
            self.tags = normalize_tag_names(self.tags)

    def provided_fields(self) -> Dict[str, Any]:
        """Return the supplied fields, excluding tags.

        Returns:
            Dict[str, Any]: Column name to new value for every supplied field.
        """
        values = {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "due_date": self.due_date,
        }
        return {key: value for key, value in values.items() if value is not UNSET}

    def replaces_tags(self) -> bool:
        return self.tags is not UNSET


@dataclass(frozen=True)
class ReorderPlacement:
    """A single ``{id, orderIndex}`` pair of a reorder batch."""

    task_id: str
    order_index: int
