"""Tag input schemas for API requests.

This module contains Pydantic models for tag-related API requests,
including tag creation and partial update operations.
"""

from typing import Optional

from pydantic import Field

from application.rest.schemas.base import CamelModel


class TagCreate(CamelModel):
    """Schema for creating a new tag.

    Attributes:
        name (str): The name of the tag, 1..50 characters.
        color (str, optional): Display color, defaults to "slate".

    Example:
        >>> tag_data = TagCreate(name="work", color="blue")
    """

    name: str = Field(..., min_length=1, max_length=50, description="Tag name")
    color: str = Field(default="slate", min_length=1, description="Display color")


class TagUpdate(CamelModel):
    """Schema for a partial tag update.

    Attributes:
        name (str, optional): The new name for the tag.
        color (str, optional): The new color for the tag.

    Example:
        >>> tag_update = TagUpdate(color="red")
    """

    name: Optional[str] = Field(
        default=None, min_length=1, max_length=50, description="New tag name"
    )
    color: Optional[str] = Field(default=None, min_length=1, description="New color")
