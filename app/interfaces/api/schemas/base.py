"""Shared configuration for API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema whose wire names are camelCase; snake_case input is accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class MessageResponse(CamelModel):
    message: str


class CountResponse(CamelModel):
    count: int


__all__ = ["CamelModel", "CountResponse", "MessageResponse"]
