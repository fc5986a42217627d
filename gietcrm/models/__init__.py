"""
Entity models.
All records are exported from here for easy imports.
"""

from gietcrm.models.user import User
from gietcrm.models.client import Client
from gietcrm.models.visit import Visit, VisitType, VisitResult
from gietcrm.models.reminder import Reminder


__all__ = [
    "User",
    "Client",
    "Visit",
    "VisitType",
    "VisitResult",
    "Reminder",
]
