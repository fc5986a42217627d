"""
Client model.
A client is a workshop visited by the sales representative.
"""

from typing import Optional

from gietcrm.models.base import BaseModel, Timestamp


class Client(BaseModel):
    """
    Client record.

    Attributes:
        name: Workshop name
        contact_person: Person to ask for on site
        phone: Contact phone number
        email: Contact email address
        address: Street address
        city: City
        notes: Free-form notes
        created_at: Set by the backend on insert
        owner_id: User who created the record
    """

    name: str
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[Timestamp] = None
    owner_id: Optional[str] = None

    def matches(self, term: str) -> bool:
        """Case-insensitive match on name, contact person or city."""
        term = term.casefold()
        return any(
            term in (value or "").casefold()
            for value in (self.name, self.contact_person, self.city)
        )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"
