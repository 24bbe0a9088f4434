"""Shared schema base: camelCase on the wire, snake_case in Python."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request/response bodies.

    JSON uses the stored document field names (accessoryType, addToAccessoryId,
    ...); requests may also use the Python names. Responses validate straight
    from application DTOs.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
