"""
Base schema configuration and common schemas.
"""

from typing import Any, ClassVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RequestSchema(BaseSchema):
    """
    Request struct for one entity.

    Fields are all optional at parse time; the data-access layer checks
    ``required_fields`` before anything is sent to the backend.
    """

    required_fields: ClassVar[tuple[str, ...]] = ()
    # Optional on input but never null in storage
    non_nullable_fields: ClassVar[tuple[str, ...]] = ()

    def to_partial(self) -> dict[str, Any]:
        """Fields explicitly set by the caller, keyed by application name."""
        return self.model_dump(exclude_unset=True, by_alias=True, mode="json")


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str
    success: bool = True
