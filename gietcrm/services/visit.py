"""
Visit service.
Visits are listed newest first.
"""

from gietcrm.core import mapper
from gietcrm.models.visit import Visit, VisitType, VisitResult
from gietcrm.services.base import EntityService


class VisitService(EntityService[Visit]):
    """
    Service for visit operations.

    Creating a visit never schedules its follow-up reminder; callers that
    want one create it with ``ReminderService`` as a separate call.
    """

    field_map = mapper.VISIT
    model = Visit
    sort_field = "date"
    sort_descending = True
    defaults = {
        "type": VisitType.FOLLOW_UP.value,
        "result": VisitResult.PENDING.value,
        "notes": "",
    }

    async def list(self, client_id: str | None = None) -> list[Visit]:
        """All visits, or those of one client, newest first."""
        if client_id:
            return await self._select(clientId=client_id)
        return await self._select()
