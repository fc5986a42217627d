"""
Reminder model.
"""

from gietcrm.models.base import BaseModel, Timestamp


class Reminder(BaseModel):
    """Follow-up task attached to a client."""

    client_id: str
    title: str
    date: Timestamp
    completed: bool = False
    owner_id: str | None = None

    def __repr__(self) -> str:
        return f"<Reminder(id={self.id}, title='{self.title}', completed={self.completed})>"
