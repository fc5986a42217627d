"""
Client service.
Handles client CRUD operations.
"""

from typing import Optional

from gietcrm.core import mapper
from gietcrm.models.client import Client
from gietcrm.models.user import User
from gietcrm.schemas.client import ClientCreate, ClientUpdate
from gietcrm.services.base import EntityService


class ClientService(EntityService[Client]):
    """Service for client operations. Lists are ordered by name."""

    field_map = mapper.CLIENT
    model = Client
    sort_field = "name"
    defaults = {
        "contactPerson": "",
        "phone": "",
        "email": "",
        "address": "",
        "city": "",
        "notes": "",
    }

    def _sort_key(self, record: Client) -> str:
        return record.name.casefold()

    async def save(
        self,
        owner: Optional[User],
        data: ClientCreate | ClientUpdate,
        client_id: str | None = None,
    ) -> Client:
        """
        Create the client when no id is given, update it otherwise.

        Args:
            owner: Acting user
            data: Client data
            client_id: Id of an existing client

        Returns:
            Saved client
        """
        if client_id:
            return await self.update(owner, client_id, data)
        return await self.create(owner, data)

    async def list(self, search: str | None = None) -> list[Client]:
        """
        List clients sorted by name.

        Args:
            search: Optional term matched against name, contact person and city

        Returns:
            Clients, empty if the backend could not be read
        """
        clients = await self._select()
        if search:
            clients = [c for c in clients if c.matches(search)]
        return clients
