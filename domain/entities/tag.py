"""Tag domain entity.

This module contains the Tag domain entity that represents
a tag in the business domain with its rules and behaviors.
"""

from dataclasses import dataclass
from typing import Optional

TAG_NAME_MAX_LENGTH = 50


@dataclass(frozen=True)
class TagEntity:
    """Domain entity representing a tag.

    This is an immutable domain object that represents a tag
    with its business rules and constraints.

    Attributes:
        id (Optional[str]): Unique identifier for the tag. None for new tags.
        name (str): The display name of the tag, unique and case-sensitive.
        color (str): Display color name.
        task_count (Optional[int]): Number of associated tasks, when computed.

    Example:
        >>> tag = TagEntity(id=None, name="work")
        >>> print(tag.color)
        "slate"

    Business Rules:
        - Tag name must be non-empty and at most 50 characters
        - Tag names are unique (enforced at repository level)
        - task_count is derived, never stored
    """

    id: Optional[str]
    name: str
    color: str = "slate"
    task_count: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tag entity after initialization.

        Raises:
            ValueError: If tag name is empty, too long, or color is empty.
        """
        if not self.name or not self.name.strip():
            raise ValueError("Tag name cannot be empty or whitespace")
        if len(self.name) > TAG_NAME_MAX_LENGTH:
            raise ValueError(
                f"Tag name cannot exceed {TAG_NAME_MAX_LENGTH} characters"
            )
        if not self.color or not self.color.strip():
            raise ValueError("Tag color cannot be empty")

    def is_new(self) -> bool:
        """Check if this is a new tag (not yet persisted).

        Returns:
            bool: True if the tag has no ID (new), False otherwise.
        """
        return self.id is None

    def with_changes(
        self, name: Optional[str] = None, color: Optional[str] = None
    ) -> "TagEntity":
        """Create a copy of this tag with the given fields replaced.

        Args:
            name (Optional[str]): New name, or None to keep the current one.
            color (Optional[str]): New color, or None to keep the current one.

        Returns:
            TagEntity: A new, validated TagEntity instance.

        Example:
            >>> tag = TagEntity(id="t1", name="work", color="slate")
            >>> tag.with_changes(color="red").color
            "red"
        """
        return TagEntity(
            id=self.id,
            name=name if name is not None else self.name,
            color=color if color is not None else self.color,
            task_count=self.task_count,
        )
