"""
Field mapper tests.
"""

import pytest

from gietcrm.core import mapper


CLIENT = {
    "id": "c-1",
    "name": "Talleres Ruiz",
    "contactPerson": "Ana Ruiz",
    "phone": "600123123",
    "email": "ana@talleresruiz.es",
    "address": "Calle Mayor 3",
    "city": "Zaragoza",
    "notes": "Cliente desde 2019",
    "createdAt": "2024-01-01T10:00:00+00:00",
    "ownerId": "u-1",
}

VISIT = {
    "id": "v-1",
    "clientId": "c-1",
    "date": "2024-03-01T09:30:00+00:00",
    "type": "Seguimiento",
    "result": "Interesado",
    "notes": "Pide presupuesto",
    "followUpDate": "2024-03-15T09:00:00+00:00",
    "ownerId": "u-1",
}

REMINDER = {
    "id": "r-1",
    "clientId": "c-1",
    "title": "Seguimiento tras Seguimiento",
    "date": "2024-03-15T09:00:00+00:00",
    "completed": False,
    "ownerId": "u-1",
}


@pytest.mark.parametrize(
    "field_map, record",
    [
        (mapper.CLIENT, CLIENT),
        (mapper.VISIT, VISIT),
        (mapper.REMINDER, REMINDER),
    ],
)
def test_round_trip(field_map, record):
    """Storage and back reproduces every defined field."""
    assert mapper.from_storage(field_map, mapper.to_storage(field_map, record)) == record


def test_to_storage_renames_fields():
    """Application names become column names."""
    row = mapper.to_storage(mapper.CLIENT, CLIENT)

    assert row["contact_person"] == "Ana Ruiz"
    assert row["created_at"] == CLIENT["createdAt"]
    assert row["user_id"] == "u-1"
    assert "contactPerson" not in row


def test_to_storage_omits_absent_fields():
    """Nothing is defaulted by the mapper."""
    row = mapper.to_storage(mapper.VISIT, {"clientId": "c-1", "date": "2024-01-01"})

    assert row == {"client_id": "c-1", "date": "2024-01-01"}


def test_unknown_fields_are_dropped():
    """Unrecognized names are dropped in both directions."""
    assert mapper.to_storage(mapper.REMINDER, {"title": "x", "priority": 1}) == {"title": "x"}
    assert mapper.from_storage(
        mapper.REMINDER, {"title": "x", "updated_at": "2024-01-01"}
    ) == {"title": "x"}


def test_column_lookup():
    assert mapper.VISIT.column("followUpDate") == "follow_up_date"
    assert mapper.VISIT.table == "visits"
