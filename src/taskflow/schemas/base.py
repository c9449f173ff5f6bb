"""Shared schema base and response envelopes."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Either name is accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    """Body returned by operations that only confirm an outcome."""

    status_code: int
    message: str


class DataResponse(MessageResponse, Generic[T]):
    """Confirmation body that also carries the affected entity or entities."""

    data: T
