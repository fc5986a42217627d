"""
Dashboard endpoints.
"""

from fastapi import APIRouter

from gietcrm.api.deps import DbSession, CurrentUser
from gietcrm.schemas.dashboard import DashboardOverview
from gietcrm.services.dashboard import DashboardService


router = APIRouter()


@router.get(
    "",
    response_model=DashboardOverview,
    summary="Resumen de actividad",
    description="Clientes, visitas de hoy, pendientes y oportunidades",
)
async def get_dashboard(
    current_user: CurrentUser,
    db: DbSession,
) -> DashboardOverview:
    """Obtener el resumen de actividad."""
    return await DashboardService(db).get_overview()
