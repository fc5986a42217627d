"""
Client request schemas.
"""

from typing import ClassVar
from pydantic import Field

from gietcrm.schemas.base import RequestSchema


class ClientCreate(RequestSchema):
    """Schema for creating a new client."""

    required_fields: ClassVar[tuple[str, ...]] = ("name",)

    name: str | None = Field(None, max_length=255)
    contact_person: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    notes: str | None = None


class ClientUpdate(ClientCreate):
    """Schema for updating a client. Only the fields that are set are written."""
