"""
Shared data-access behaviour.
Each entity service binds a field map, a record model, its sort order and
its create-time defaults to the operations below.
"""

import logging
from typing import Any, ClassVar, Generic, Optional, TypeVar

import pydantic
from pydantic.alias_generators import to_camel

from gietcrm.core.backend import Connection
from gietcrm.core.exceptions import (
    AuthError,
    AuthorizationError,
    CRMError,
    NotFoundError,
    ValidationError,
)
from gietcrm.core.mapper import FieldMap
from gietcrm.models.base import BaseModel
from gietcrm.models.user import User
from gietcrm.schemas.base import RequestSchema


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def missing_fields(partial: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    """Required fields that are absent, null or blank in ``partial``."""
    return [
        name for name in required
        if partial.get(name) is None or partial.get(name) == ""
    ]


class EntityService(Generic[T]):
    """Base service for one remote table."""

    field_map: ClassVar[FieldMap]
    model: ClassVar[type]
    sort_field: ClassVar[str]
    sort_descending: ClassVar[bool] = False
    defaults: ClassVar[dict[str, Any]] = {}

    def __init__(self, db: Connection):
        self.db = db

    @property
    def table(self) -> str:
        return self.field_map.table

    def _to_model(self, row: dict) -> T:
        return self.model.model_validate(self.field_map.from_storage(row))

    def _sort_key(self, record: T) -> Any:
        return getattr(record, self.sort_field)

    def _sort(self, records: list[T]) -> list[T]:
        return sorted(records, key=self._sort_key, reverse=self.sort_descending)

    async def _select(self, **filters: Any) -> list[T]:
        """
        Fetch, map and sort rows matching ``filters`` (application names).
        Read failures yield an empty list; rows that do not map to the
        record model are skipped.
        """
        try:
            rows = await self.db.select(
                self.table,
                filters={self.field_map.column(k): v for k, v in filters.items()},
                order=[(self.field_map.column(to_camel(self.sort_field)), not self.sort_descending)],
            )
        except CRMError as e:
            logger.warning(f"Lectura de {self.table} fallida, lista vacía: {e}")
            return []

        records = []
        for row in rows:
            try:
                records.append(self._to_model(row))
            except pydantic.ValidationError as e:
                logger.warning(
                    f"Fila {row.get('id')} de {self.table} ignorada: "
                    f"{e.error_count()} campos inválidos"
                )
        return self._sort(records)

    async def get_by_id(self, entity_id: str) -> Optional[T]:
        """
        Get one record by id.

        Returns:
            The record, or None if no row matches or the read failed
        """
        records = await self._select(id=entity_id)
        return records[0] if records else None

    async def get_or_404(self, entity_id: str) -> T:
        """
        Get one record by id or raise.

        Raises:
            NotFoundError: If no row matches
        """
        record = await self.get_by_id(entity_id)
        if record is None:
            raise NotFoundError(f"{self.model.__name__} {entity_id} no encontrado")
        return record

    async def create(self, owner: Optional[User], data: RequestSchema) -> T:
        """
        Insert a new row owned by ``owner``.

        Args:
            owner: Acting user, stamped as the row's owner
            data: Request struct without id

        Returns:
            Created record

        Raises:
            ValidationError: If a required field is missing (nothing is sent)
            AuthError: If there is no acting user
        """
        partial = data.to_partial()
        missing = missing_fields(partial, data.required_fields)
        if missing:
            raise ValidationError(fields=missing)
        if owner is None:
            raise AuthError()

        record = dict(self.defaults)
        record.update({k: v for k, v in partial.items() if v is not None})
        record["ownerId"] = owner.id

        try:
            row = await self.db.insert(self.table, self.field_map.to_storage(record))
        except CRMError as e:
            logger.error(f"Alta en {self.table} fallida: {e}")
            raise

        created = self._to_model(row)
        logger.info(f"{self.model.__name__} {created.id} creado por {owner.id}")
        return created

    async def update(self, owner: Optional[User], entity_id: str, data: RequestSchema) -> T:
        """
        Update the fields set in ``data``.

        Raises:
            ValidationError: If a required or non-nullable field is
                explicitly cleared (nothing is sent)
            AuthError: If there is no acting user
            NotFoundError: If no row matched the id
        """
        partial = data.to_partial()
        guarded = data.required_fields + data.non_nullable_fields
        present = tuple(name for name in guarded if name in partial)
        cleared = missing_fields(partial, present)
        if cleared:
            raise ValidationError(fields=cleared)
        if owner is None:
            raise AuthError()

        if not partial:
            return await self.get_or_404(entity_id)

        try:
            rows = await self.db.update(
                self.table,
                self.field_map.to_storage(partial),
                filters={
                    self.field_map.column("id"): entity_id,
                    self.field_map.column("ownerId"): owner.id,
                },
            )
        except CRMError as e:
            logger.error(f"Actualización de {self.table} {entity_id} fallida: {e}")
            raise

        if not rows:
            raise NotFoundError(f"{self.model.__name__} {entity_id} no encontrado")
        return self._to_model(rows[0])

    async def delete(self, entity_id: str) -> None:
        """
        Delete a row by id.
        Ownership is enforced by the backend's row policy: rows of other
        users are invisible, so nothing gets removed.

        Raises:
            AuthorizationError: If the backend removed no row
        """
        try:
            rows = await self.db.delete(
                self.table, filters={self.field_map.column("id"): entity_id}
            )
        except CRMError as e:
            logger.error(f"Borrado en {self.table} {entity_id} fallido: {e}")
            raise

        if not rows:
            raise AuthorizationError(
                f"No se pudo eliminar {self.model.__name__} {entity_id}"
            )
        logger.info(f"{self.model.__name__} {entity_id} eliminado")

    async def list(self) -> list[T]:
        """All rows visible to the acting user, in the entity's fixed order."""
        return await self._select()
