"""
Pydantic schemas for request/response validation.
"""

from gietcrm.schemas.base import MessageResponse
from gietcrm.schemas.client import (
    ClientCreate,
    ClientUpdate,
)
from gietcrm.schemas.visit import (
    VisitCreate,
    VisitUpdate,
)
from gietcrm.schemas.reminder import (
    ReminderCreate,
    ReminderUpdate,
)
from gietcrm.schemas.auth import (
    LoginRequest,
    SignInResult,
    TokenResponse,
)
from gietcrm.schemas.dashboard import DashboardOverview

__all__ = [
    "MessageResponse",
    # Client
    "ClientCreate",
    "ClientUpdate",
    # Visit
    "VisitCreate",
    "VisitUpdate",
    # Reminder
    "ReminderCreate",
    "ReminderUpdate",
    # Auth
    "LoginRequest",
    "SignInResult",
    "TokenResponse",
    # Dashboard
    "DashboardOverview",
]
