"""
Base model for entities read from the remote store.
"""

from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator, BaseModel as PydanticModel, ConfigDict
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Naive timestamps are taken as UTC so that lists can always be compared
Timestamp = Annotated[datetime, AfterValidator(_as_utc)]


class BaseModel(PydanticModel):
    """
    Abstract base for entity records.
    Attributes are snake_case; the application field names (camelCase)
    are their aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
