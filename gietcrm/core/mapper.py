"""
Field mapper.

Translates records between the application's field names (camelCase, as
exposed by the API and the entity models) and the backend's column names
(snake_case). This module is the only place where table and column names
of the remote store are spelled out.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class FieldMap:
    """Fixed renaming table for one entity."""

    table: str
    fields: Mapping[str, str]
    _reverse: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "_reverse", {column: name for name, column in self.fields.items()}
        )

    def to_storage(self, partial: Mapping[str, Any]) -> dict[str, Any]:
        """Rename every recognized field; absent fields stay absent."""
        return {
            self.fields[name]: value
            for name, value in partial.items()
            if name in self.fields
        }

    def from_storage(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Rename recognized columns back; unknown columns are dropped."""
        return {
            self._reverse[column]: value
            for column, value in row.items()
            if column in self._reverse
        }

    def column(self, name: str) -> str:
        """Storage column for an application field name."""
        return self.fields[name]


CLIENT = FieldMap(
    table="clients",
    fields={
        "id": "id",
        "name": "name",
        "contactPerson": "contact_person",
        "phone": "phone",
        "email": "email",
        "address": "address",
        "city": "city",
        "notes": "notes",
        "createdAt": "created_at",
        "ownerId": "user_id",
    },
)

VISIT = FieldMap(
    table="visits",
    fields={
        "id": "id",
        "clientId": "client_id",
        "date": "date",
        "type": "type",
        "result": "result",
        "notes": "notes",
        "followUpDate": "follow_up_date",
        "ownerId": "user_id",
    },
)

REMINDER = FieldMap(
    table="reminders",
    fields={
        "id": "id",
        "clientId": "client_id",
        "title": "title",
        "date": "date",
        "completed": "completed",
        "ownerId": "user_id",
    },
)


def to_storage(field_map: FieldMap, partial: Mapping[str, Any]) -> dict[str, Any]:
    return field_map.to_storage(partial)


def from_storage(field_map: FieldMap, row: Mapping[str, Any]) -> dict[str, Any]:
    return field_map.from_storage(row)
