"""Tag output schemas for API responses.

This module contains Pydantic models for tag-related API responses.
"""

from typing import Optional

from application.rest.schemas.base import CamelModel


class TagResponse(CamelModel):
    """Schema for tag data in API responses.

    Attributes:
        id (str): UUID string identifier of the tag.
        name (str): The name of the tag.
        color (str): Display color.
        task_count (int, optional): Number of associated tasks, only on tag endpoints.

    Example:
        >>> tag_response = TagResponse(id="tag-uuid-123", name="work", color="slate")
    """

    id: str
    name: str
    color: str
    task_count: Optional[int] = None
