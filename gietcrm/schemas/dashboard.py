"""
Dashboard schemas.
"""

from gietcrm.models.reminder import Reminder
from gietcrm.models.visit import Visit
from gietcrm.schemas.base import BaseSchema


class DashboardOverview(BaseSchema):
    """Activity summary shown on the home screen."""

    client_count: int = 0
    visits_today: int = 0
    pending_reminders: int = 0
    opportunities: int = 0
    upcoming_reminders: list[Reminder] = []
    recent_visits: list[Visit] = []
