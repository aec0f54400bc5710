"""Tag converters for transforming between domain entities and Pydantic schemas.

This module contains converter functions for transforming tag objects
between the domain layer (entities) and the API layer (Pydantic).
"""

from typing import List

from application.rest.schemas.output.tag_output import TagResponse
from domain.entities.tag import TagEntity


class TagConverter:
    """Converter class for tag transformations between layers.

    Example:
        >>> tag_response = TagConverter.entity_to_response(tag_entity)
    """

    @staticmethod
    def entity_to_response(
        tag_entity: TagEntity, include_count: bool = True
    ) -> TagResponse:
        """Convert TagEntity domain object to TagResponse Pydantic schema.

        Args:
            tag_entity (TagEntity): Domain entity representing a tag.
            include_count (bool): Whether to expose the derived task count.

        Returns:
            TagResponse: Pydantic schema for API response.

        Raises:
            ValueError: If the tag entity has no ID (not persisted).

        Example:
            >>> tag_entity = TagEntity(id="t1", name="work", task_count=2)
            >>> TagConverter.entity_to_response(tag_entity).task_count
            2
        """
        if tag_entity.is_new():
            raise ValueError("Cannot convert new tag entity to response (no ID)")

        return TagResponse(
            id=tag_entity.id,
            name=tag_entity.name,
            color=tag_entity.color,
            task_count=tag_entity.task_count if include_count else None,
        )

    @staticmethod
    def entities_to_responses(tag_entities: List[TagEntity]) -> List[TagResponse]:
        """Convert list of TagEntity domain objects to list of TagResponse schemas."""
        return [TagConverter.entity_to_response(entity) for entity in tag_entities]
