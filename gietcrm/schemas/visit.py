"""
Visit request schemas.
"""

from typing import ClassVar
from datetime import datetime

from gietcrm.models.visit import VisitType, VisitResult
from gietcrm.schemas.base import RequestSchema


class VisitCreate(RequestSchema):
    """Schema for reporting a visit."""

    required_fields: ClassVar[tuple[str, ...]] = ("clientId", "date")

    client_id: str | None = None
    date: datetime | None = None
    type: VisitType | None = None
    result: VisitResult | None = None
    notes: str | None = None
    follow_up_date: datetime | None = None


class VisitUpdate(RequestSchema):
    """Schema for editing a visit report."""

    required_fields: ClassVar[tuple[str, ...]] = ("date",)
    non_nullable_fields: ClassVar[tuple[str, ...]] = ("type", "result")

    date: datetime | None = None
    type: VisitType | None = None
    result: VisitResult | None = None
    notes: str | None = None
    follow_up_date: datetime | None = None
