"""
Reminder data-access tests.
"""

import json
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from gietcrm.core.exceptions import AuthError, NotFoundError, ValidationError
from gietcrm.schemas.reminder import ReminderCreate, ReminderUpdate
from gietcrm.services.reminder import ReminderService


def utc(month: int, day: int) -> datetime:
    return datetime(2024, month, day, 9, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_list_soonest_first(db, owner):
    service = ReminderService(db)
    for month in (3, 1, 2):
        await service.create(
            owner, ReminderCreate(client_id="c-1", title=f"Llamar {month}", date=utc(month, 1))
        )

    reminders = await service.list()

    assert [r.title for r in reminders] == ["Llamar 1", "Llamar 2", "Llamar 3"]


@pytest.mark.asyncio
async def test_create_defaults_to_pending(db, owner, fake_backend):
    reminder = await ReminderService(db).create(
        owner, ReminderCreate(client_id="c-1", title="Llamar", date=utc(1, 1))
    )

    assert reminder.completed is False
    assert fake_backend.rows("reminders")[0]["completed"] is False


@pytest.mark.asyncio
async def test_create_requires_title(db, owner, fake_backend):
    with pytest.raises(ValidationError) as exc_info:
        await ReminderService(db).create(
            owner, ReminderCreate(client_id="c-1", date=utc(1, 1))
        )

    assert exc_info.value.fields == ["title"]
    assert fake_backend.writes == []


@pytest.mark.asyncio
async def test_toggle_round_trip(db, owner):
    """Toggling twice restores the original record."""
    service = ReminderService(db)
    created = await service.create(
        owner, ReminderCreate(client_id="c-1", title="Llamar", date=utc(1, 1))
    )
    original = await service.get_by_id(created.id)

    done = await service.toggle(owner, created.id)
    assert done.completed is True

    undone = await service.toggle(owner, created.id)
    assert undone.completed is False

    assert await service.get_by_id(created.id) == original


@pytest.mark.asyncio
async def test_toggle_writes_only_completed(db, owner, fake_backend):
    service = ReminderService(db)
    created = await service.create(
        owner, ReminderCreate(client_id="c-1", title="Llamar", date=utc(1, 1))
    )

    await service.toggle(owner, created.id)

    patch = [r for r in fake_backend.writes if r.method == "PATCH"][-1]
    assert json.loads(patch.content) == {"completed": True}


@pytest.mark.asyncio
async def test_toggle_missing_reminder(db, owner):
    with pytest.raises(NotFoundError):
        await ReminderService(db).toggle(owner, "missing")


@pytest.mark.asyncio
async def test_toggle_without_session(db):
    with pytest.raises(AuthError):
        await ReminderService(db).toggle(None, "r-1")


@pytest.mark.asyncio
async def test_update_and_list_by_client(db, owner):
    service = ReminderService(db)
    first = await service.create(
        owner, ReminderCreate(client_id="c-1", title="Llamar", date=utc(1, 1))
    )
    await service.create(
        owner, ReminderCreate(client_id="c-2", title="Visitar", date=utc(1, 2))
    )

    updated = await service.update(owner, first.id, ReminderUpdate(title="Enviar catálogo"))

    assert updated.title == "Enviar catálogo"
    assert [r.title for r in await service.list(client_id="c-1")] == ["Enviar catálogo"]


# API


@pytest.mark.asyncio
async def test_agenda_endpoints(auth_client: AsyncClient):
    response = await auth_client.post(
        "/api/v1/reminders",
        json={"clientId": "c-1", "title": "Llamar", "date": "2024-01-01T09:00:00Z"},
    )
    assert response.status_code == 201
    reminder = response.json()
    assert reminder["completed"] is False

    response = await auth_client.post(f"/api/v1/reminders/{reminder['id']}/toggle")
    assert response.status_code == 200
    assert response.json()["completed"] is True

    response = await auth_client.delete(f"/api/v1/reminders/{reminder['id']}")
    assert response.status_code == 200

    response = await auth_client.get("/api/v1/reminders")
    assert response.json() == []


@pytest.mark.asyncio
async def test_update_cannot_clear_completed(db, owner, fake_backend):
    service = ReminderService(db)
    created = await service.create(
        owner, ReminderCreate(client_id="c-1", title="Llamar", date=utc(1, 1))
    )

    with pytest.raises(ValidationError) as exc_info:
        await service.update(owner, created.id, ReminderUpdate(completed=None))

    assert exc_info.value.fields == ["completed"]
    assert [r for r in fake_backend.writes if r.method == "PATCH"] == []


@pytest.mark.asyncio
async def test_null_completed_is_rejected(auth_client: AsyncClient, fake_backend):
    response = await auth_client.post(
        "/api/v1/reminders",
        json={"clientId": "c-1", "title": "Llamar", "date": "2024-01-01T09:00:00Z"},
    )
    reminder_id = response.json()["id"]

    response = await auth_client.patch(
        f"/api/v1/reminders/{reminder_id}", json={"completed": None}
    )

    assert response.status_code == 422
    assert response.json()["fields"] == ["completed"]
    assert [r for r in fake_backend.writes if r.method == "PATCH"] == []

    response = await auth_client.get("/api/v1/reminders")
    assert response.status_code == 200
    assert response.json()[0]["completed"] is False
