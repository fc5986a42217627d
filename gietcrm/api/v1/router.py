"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter, Depends

from gietcrm.api.deps import require_configured
from gietcrm.api.v1.endpoints import (
    auth,
    clients,
    visits,
    reminders,
    dashboard,
)

api_router = APIRouter(dependencies=[Depends(require_configured)])

# Include all endpoint routers
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Autenticación"],
)

api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["Clientes"],
)

api_router.include_router(
    visits.router,
    prefix="/visits",
    tags=["Visitas"],
)

api_router.include_router(
    reminders.router,
    prefix="/reminders",
    tags=["Agenda"],
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
)
