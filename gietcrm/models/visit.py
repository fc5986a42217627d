"""
Visit model.
One commercial visit to a client and its outcome.
"""

from enum import Enum
from typing import Optional

from gietcrm.models.base import BaseModel, Timestamp


class VisitType(str, Enum):
    """Visit type enumeration."""
    FIRST_VISIT = "Primera Visita"
    FOLLOW_UP = "Seguimiento"
    AFTER_SALES = "Postventa"
    CLOSING = "Cierre"


class VisitResult(str, Enum):
    """Visit outcome enumeration."""
    INTERESTED = "Interesado"
    NOT_INTERESTED = "No Interesado"
    PENDING = "Pendiente"
    SOLD = "Vendido"


class Visit(BaseModel):
    """
    Visit record.

    Attributes:
        client_id: Visited client
        date: When the visit took place
        type: Kind of visit
        result: Outcome of the visit
        notes: Free-form report
        follow_up_date: When to follow up, if at all
        owner_id: User who created the record
    """

    client_id: str
    date: Timestamp
    type: VisitType = VisitType.FOLLOW_UP
    result: VisitResult = VisitResult.PENDING
    notes: Optional[str] = None
    follow_up_date: Optional[Timestamp] = None
    owner_id: Optional[str] = None

    def __repr__(self) -> str:
        return f"<Visit(id={self.id}, client_id={self.client_id}, date={self.date.isoformat()})>"
