"""
Reminder service.
Reminders are listed by date, soonest first.
"""

from typing import Optional

from gietcrm.core import mapper
from gietcrm.core.exceptions import AuthError
from gietcrm.models.reminder import Reminder
from gietcrm.models.user import User
from gietcrm.schemas.reminder import ReminderUpdate
from gietcrm.services.base import EntityService


class ReminderService(EntityService[Reminder]):
    """Service for reminder operations."""

    field_map = mapper.REMINDER
    model = Reminder
    sort_field = "date"
    defaults = {"completed": False}

    async def set_completed(
        self,
        owner: Optional[User],
        reminder_id: str,
        completed: bool,
    ) -> Reminder:
        """Write only the completion flag."""
        return await self.update(
            owner, reminder_id, ReminderUpdate(completed=completed)
        )

    async def toggle(self, owner: Optional[User], reminder_id: str) -> Reminder:
        """
        Flip the completion flag.

        The current state is read right before writing; there is no atomic
        toggle on the backend, so a concurrent change between the two calls
        is overwritten.

        Raises:
            AuthError: If there is no acting user
            NotFoundError: If the reminder does not exist
        """
        if owner is None:
            raise AuthError()
        current = await self.get_or_404(reminder_id)
        return await self.set_completed(owner, reminder_id, not current.completed)

    async def list(self, client_id: str | None = None) -> list[Reminder]:
        """All reminders, or those of one client, soonest first."""
        if client_id:
            return await self._select(clientId=client_id)
        return await self._select()
