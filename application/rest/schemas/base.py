"""Base schema shared by every request and response model.

Fields are declared in snake_case and exchanged in camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pydantic base model with camelCase aliases.

    Example:
        >>> class Example(CamelModel):
        ...     order_index: int
        >>> Example(orderIndex=1).model_dump(by_alias=True)
        {'orderIndex': 1}
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
