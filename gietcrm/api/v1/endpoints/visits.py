"""
Visit endpoints.
Visit reports and their follow-up reminders.
"""

import logging

from fastapi import APIRouter, status

from gietcrm.api.deps import DbSession, CurrentUser
from gietcrm.core.backend import Connection
from gietcrm.core.exceptions import BackendError, CRMError
from gietcrm.models.user import User
from gietcrm.models.visit import Visit, VisitType
from gietcrm.schemas.base import MessageResponse
from gietcrm.schemas.reminder import ReminderCreate
from gietcrm.schemas.visit import VisitCreate, VisitUpdate
from gietcrm.services.reminder import ReminderService
from gietcrm.services.visit import VisitService


logger = logging.getLogger(__name__)

router = APIRouter()


async def register_visit(db: Connection, owner: User, data: VisitCreate) -> Visit:
    """
    Create a visit and, when it has a follow-up date, its reminder.

    The two inserts are independent: if the reminder fails the visit stays
    registered without one, and the failure is reported to the caller.

    Raises:
        BackendError: If the reminder could not be created after the visit
    """
    visit = await VisitService(db).create(owner, data)
    if visit.follow_up_date is None:
        return visit

    visit_type = data.type or VisitType.FOLLOW_UP
    reminder = ReminderCreate(
        client_id=visit.client_id,
        title=f"Seguimiento tras {visit_type.value}",
        date=visit.follow_up_date,
        completed=False,
    )
    try:
        await ReminderService(db).create(owner, reminder)
    except CRMError as e:
        logger.error(f"Visita {visit.id} registrada sin recordatorio: {e}")
        raise BackendError(
            "Visita registrada, pero no se pudo crear el recordatorio de seguimiento"
        ) from e
    return visit


@router.post(
    "",
    response_model=Visit,
    status_code=status.HTTP_201_CREATED,
    summary="Reportar visita",
    description="Registra la visita y, si tiene fecha de seguimiento, su recordatorio",
)
async def create_visit(
    data: VisitCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> Visit:
    """Report a visit."""
    return await register_visit(db, current_user, data)


@router.get(
    "",
    response_model=list[Visit],
    summary="Registro de visitas",
    description="Visitas de la más reciente a la más antigua",
)
async def list_visits(
    current_user: CurrentUser,
    db: DbSession,
) -> list[Visit]:
    """List all visits."""
    return await VisitService(db).list()


@router.get(
    "/{visit_id}",
    response_model=Visit,
    summary="Detalle de visita",
)
async def get_visit(
    visit_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> Visit:
    """Get visit by ID."""
    return await VisitService(db).get_or_404(visit_id)


@router.patch(
    "/{visit_id}",
    response_model=Visit,
    summary="Editar visita",
)
async def update_visit(
    visit_id: str,
    data: VisitUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> Visit:
    """Update a visit report."""
    return await VisitService(db).update(current_user, visit_id, data)


@router.delete(
    "/{visit_id}",
    response_model=MessageResponse,
    summary="Eliminar visita",
)
async def delete_visit(
    visit_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    """Delete a visit report."""
    await VisitService(db).delete(visit_id)
    return MessageResponse(message="Visita eliminada")
