"""
Dashboard Service.
Activity summary for the signed-in sales representative.
"""

import asyncio
from datetime import date, datetime, timezone

from gietcrm.core.backend import Connection
from gietcrm.models.visit import VisitResult
from gietcrm.schemas.dashboard import DashboardOverview
from gietcrm.services.client import ClientService
from gietcrm.services.reminder import ReminderService
from gietcrm.services.visit import VisitService


class DashboardService:
    """Service for dashboard statistics."""

    def __init__(self, db: Connection):
        self.db = db

    async def get_overview(
        self,
        today: date | None = None,
        upcoming_limit: int = 4,
        recent_limit: int = 5,
    ) -> DashboardOverview:
        """
        Fetch clients, visits and reminders concurrently and summarize them.

        Args:
            today: Reference day in UTC (defaults to the current day)
            upcoming_limit: Number of pending reminders to include
            recent_limit: Number of recent visits to include

        Returns:
            Dashboard overview
        """
        if today is None:
            today = datetime.now(timezone.utc).date()

        clients, visits, reminders = await asyncio.gather(
            ClientService(self.db).list(),
            VisitService(self.db).list(),
            ReminderService(self.db).list(),
        )

        visits_today = [
            v for v in visits if v.date.astimezone(timezone.utc).date() == today
        ]
        pending = [r for r in reminders if not r.completed]
        opportunities = [v for v in visits if v.result == VisitResult.INTERESTED]

        return DashboardOverview(
            client_count=len(clients),
            visits_today=len(visits_today),
            pending_reminders=len(pending),
            opportunities=len(opportunities),
            upcoming_reminders=pending[:upcoming_limit],
            recent_visits=visits[:recent_limit],
        )
