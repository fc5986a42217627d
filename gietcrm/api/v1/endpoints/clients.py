"""
Client management endpoints.
CRUD operations for clients plus their visit history and reminders.
"""

from fastapi import APIRouter, Query, status

from gietcrm.api.deps import DbSession, CurrentUser
from gietcrm.models.client import Client
from gietcrm.models.reminder import Reminder
from gietcrm.models.visit import Visit
from gietcrm.schemas.base import MessageResponse
from gietcrm.schemas.client import ClientCreate, ClientUpdate
from gietcrm.services.client import ClientService
from gietcrm.services.reminder import ReminderService
from gietcrm.services.visit import VisitService


router = APIRouter()


@router.post(
    "",
    response_model=Client,
    status_code=status.HTTP_201_CREATED,
    summary="Añadir cliente",
)
async def create_client(
    data: ClientCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> Client:
    """Create a new client."""
    service = ClientService(db)
    return await service.create(current_user, data)


@router.get(
    "",
    response_model=list[Client],
    summary="Cartera de clientes",
    description="Clientes ordenados por nombre",
)
async def list_clients(
    current_user: CurrentUser,
    db: DbSession,
    search: str | None = Query(None, description="Buscar por nombre, contacto o ciudad"),
) -> list[Client]:
    """List all clients."""
    service = ClientService(db)
    return await service.list(search=search)


@router.get(
    "/{client_id}",
    response_model=Client,
    summary="Ficha de cliente",
)
async def get_client(
    client_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> Client:
    """Get client by ID."""
    service = ClientService(db)
    return await service.get_or_404(client_id)


@router.patch(
    "/{client_id}",
    response_model=Client,
    summary="Editar cliente",
)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> Client:
    """Update a client."""
    service = ClientService(db)
    return await service.update(current_user, client_id, data)


@router.delete(
    "/{client_id}",
    response_model=MessageResponse,
    summary="Eliminar cliente",
    description="Sus visitas y recordatorios se eliminan en el servidor",
)
async def delete_client(
    client_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    """Delete a client."""
    service = ClientService(db)
    await service.delete(client_id)
    return MessageResponse(message="Cliente eliminado")


@router.get(
    "/{client_id}/visits",
    response_model=list[Visit],
    summary="Historial de visitas del cliente",
)
async def list_client_visits(
    client_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> list[Visit]:
    """Visits of one client, newest first."""
    return await VisitService(db).list(client_id=client_id)


@router.get(
    "/{client_id}/reminders",
    response_model=list[Reminder],
    summary="Recordatorios del cliente",
)
async def list_client_reminders(
    client_id: str,
    current_user: CurrentUser,
    db: DbSession,
) -> list[Reminder]:
    """Reminders of one client, soonest first."""
    return await ReminderService(db).list(client_id=client_id)
