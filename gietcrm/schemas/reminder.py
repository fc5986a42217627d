"""
Reminder request schemas.
"""

from typing import ClassVar
from datetime import datetime
from pydantic import Field

from gietcrm.schemas.base import RequestSchema


class ReminderCreate(RequestSchema):
    """Schema for scheduling a reminder."""

    required_fields: ClassVar[tuple[str, ...]] = ("clientId", "title", "date")

    client_id: str | None = None
    title: str | None = Field(None, max_length=255)
    date: datetime | None = None
    completed: bool | None = None


class ReminderUpdate(RequestSchema):
    """Schema for updating a reminder."""

    required_fields: ClassVar[tuple[str, ...]] = ("title", "date")
    non_nullable_fields: ClassVar[tuple[str, ...]] = ("completed",)

    title: str | None = Field(None, max_length=255)
    date: datetime | None = None
    completed: bool | None = None
