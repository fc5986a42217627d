"""
Agenda endpoints.
Reminder scheduling, completion and removal.
"""

from fastapi import APIRouter, status

from gietcrm.api.deps import DbSession, CurrentUser
from gietcrm.models.reminder import Reminder
from gietcrm.schemas.base import MessageResponse
from gietcrm.schemas.reminder import ReminderCreate, ReminderUpdate
from gietcrm.services.reminder import ReminderService


router = APIRouter()


@router.post(
    "",
    response_model=Reminder,
    status_code=status.HTTP_201_CREATED,
    summary="Nuevo recordatorio",
)
async def create_reminder(
    data: ReminderCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> Reminder:
    """Schedule a reminder."""
    return await ReminderService(db).create(current_user, data)


@router.get(
    "",
    response_model=list[Reminder],
    summary="Agenda",
    description="Recordatorios ordenados por fecha",
)
async def list_reminders(
    current_user: CurrentUser,
    db: DbSession,
) -> list[Reminder]:
    """List all reminders."""
    return await ReminderService(db).list()


@router.get(
    "/{reminder_id}",
    response_model=Reminder,
    summary="Detalle de recordatorio",
)
async def get_reminder(
    reminder_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> Reminder:
    return await ReminderService(db).get_or_404(reminder_id)


@router.patch(
    "/{reminder_id}",
    response_model=Reminder,
    summary="Editar recordatorio",
)
async def update_reminder(
    reminder_id: str,
    data: ReminderUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> Reminder:
    """Update a reminder."""
    return await ReminderService(db).update(current_user, reminder_id, data)


@router.post(
    "/{reminder_id}/toggle",
    response_model=Reminder,
    summary="Marcar como hecho / pendiente",
)
async def toggle_reminder(
    reminder_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> Reminder:
    """Flip the completion flag of a reminder."""
    return await ReminderService(db).toggle(current_user, reminder_id)


@router.delete(
    "/{reminder_id}",
    response_model=MessageResponse,
    summary="Eliminar recordatorio",
)
async def delete_reminder(
    reminder_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    """Delete a reminder."""
    await ReminderService(db).delete(reminder_id)
    return MessageResponse(message="Recordatorio eliminado")
