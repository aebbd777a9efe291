"""Notes Routes — end-to-end tests through the FastAPI app.

Tests cover:
    - create → get → list → update → toggle → change-date → repeat → delete
    - camelCase request bodies from the calendar client
    - 401 without caller id, 403 for other owners, 404 for unknown ids
    - validation errors use the structured envelope
"""

from uuid import UUID, uuid4

import pytest

from calnotes.models.note import Note

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}

NOTE_BODY = {
    "title": "Standup",
    "subject": "Work",
    "contentBlocks": [
        {"type": "text", "data": "Bring the report"},
        {"type": "code", "data": {"lang": "sql", "lines": ["SELECT 1;"]}},
    ],
    "assignedDate": "2024-04-28T09:30:00Z",
    "calendarId": "cal-1",
}


async def _create(client, headers=ALICE, **overrides) -> str:
    res = await client.post("/api/v1/notes", json={**NOTE_BODY, **overrides}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["note_id"]


async def test_create_and_get_round_trip(client):
    res = await client.post("/api/v1/notes", json=NOTE_BODY, headers=ALICE)
    assert res.status_code == 201
    assert res.json()["message"] == "Note saved successfully"
    note_id = res.json()["note_id"]

    res = await client.get(f"/api/v1/notes/{note_id}", headers=ALICE)
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Standup"
    assert body["subject"] == "Work"
    assert body["content_blocks"] == NOTE_BODY["contentBlocks"]
    assert body["calendar_id"] == "cal-1"
    assert body["is_done"] is False


async def test_snake_case_body_also_accepted(client):
    res = await client.post("/api/v1/notes", json={
        "title": "", "content_blocks": [], "assigned_date": "2024-01-05",
    }, headers=ALICE)
    assert res.status_code == 201


async def test_missing_caller_id_is_unauthorized(client):
    res = await client.get("/api/v1/notes")
    assert res.status_code == 401


async def test_missing_assigned_date_is_validation_error(client):
    body = {k: v for k, v in NOTE_BODY.items() if k != "assignedDate"}
    res = await client.post("/api/v1/notes", json=body, headers=ALICE)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_returns_only_callers_summaries(client):
    await _create(client)
    await _create(client, headers=BOB, title="Bob's")

    res = await client.get("/api/v1/notes", headers=ALICE)
    assert res.status_code == 200
    notes = res.json()
    assert [n["title"] for n in notes] == ["Standup"]
    assert "content_blocks" not in notes[0]


async def test_calendar_listing(client):
    await _create(client, calendarId="work")
    await _create(client, calendarId="home")

    res = await client.get("/api/v1/calendars/work/notes", headers=ALICE)
    assert [n["calendar_id"] for n in res.json()] == ["work"]

    res = await client.get("/api/v1/calendars/work/notes", headers=BOB)
    assert res.json() == []


async def test_partial_update(client):
    note_id = await _create(client)

    res = await client.put(f"/api/v1/notes/{note_id}", json={"subject": "Personal"}, headers=ALICE)
    assert res.status_code == 200
    assert res.json()["message"] == "Note updated successfully"

    body = (await client.get(f"/api/v1/notes/{note_id}", headers=ALICE)).json()
    assert body["subject"] == "Personal"
    assert body["title"] == "Standup"
    assert body["content_blocks"] == NOTE_BODY["contentBlocks"]


async def test_toggle_twice(client):
    note_id = await _create(client)

    first = await client.patch(f"/api/v1/notes/{note_id}/toggle", headers=ALICE)
    second = await client.patch(f"/api/v1/notes/{note_id}/toggle", headers=ALICE)

    assert first.json()["is_done"] is True
    assert second.json()["is_done"] is False


async def test_change_date_normalizes(client):
    note_id = await _create(client)

    res = await client.patch(
        f"/api/v1/notes/{note_id}/change-date",
        json={"assignedDate": "2024-03-15T17:42:00Z"}, headers=ALICE,
    )

    assert res.status_code == 200
    assert res.json()["assigned_date"].startswith("2024-03-15T00:00:00")


async def test_change_date_without_date_is_400(client):
    note_id = await _create(client)
    res = await client.patch(f"/api/v1/notes/{note_id}/change-date", json={}, headers=ALICE)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_repeat_to_end_of_month(client):
    note_id = await _create(client)

    res = await client.post(
        f"/api/v1/notes/{note_id}/repeat", json={"repeatInterval": 2}, headers=ALICE,
    )

    assert res.status_code == 201
    assert res.json()["duplicated_count"] == 1
    assert res.json()["message"] == "Duplicated 1 notes to end of month."
    assert len((await client.get("/api/v1/notes", headers=ALICE)).json()) == 2


@pytest.mark.parametrize("interval", [0, 8, -1])
async def test_repeat_invalid_interval(client, interval):
    note_id = await _create(client)

    res = await client.post(
        f"/api/v1/notes/{note_id}/repeat", json={"repeatInterval": interval}, headers=ALICE,
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert len((await client.get("/api/v1/notes", headers=ALICE)).json()) == 1


async def test_delete_then_404(client):
    note_id = await _create(client)

    assert (await client.delete(f"/api/v1/notes/{note_id}", headers=ALICE)).status_code == 200
    res = await client.delete(f"/api/v1/notes/{note_id}", headers=ALICE)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOTE_NOT_FOUND"


async def test_unknown_note_is_404(client):
    res = await client.get(f"/api/v1/notes/{uuid4()}", headers=ALICE)
    assert res.status_code == 404


@pytest.mark.parametrize("method, suffix, body", [
    ("GET", "", None),
    ("PUT", "", {"title": "pwned"}),
    ("DELETE", "", None),
    ("PATCH", "/toggle", None),
    ("PATCH", "/change-date", {"assignedDate": "2024-04-01"}),
    ("POST", "/repeat", {"repeatInterval": 1}),
])
async def test_other_owner_gets_403_without_fields(client, method, suffix, body):
    note_id = await _create(client)

    res = await client.request(
        method, f"/api/v1/notes/{note_id}{suffix}", json=body, headers=BOB,
    )

    assert res.status_code == 403
    error = res.json()["error"]
    assert error["code"] == "ACCESS_DENIED"
    assert "Standup" not in res.text
    assert (await client.get(f"/api/v1/notes/{note_id}", headers=ALICE)).json()["title"] == "Standup"


async def test_corrupted_note_is_500_without_details(client, test_session_factory):
    note_id = await _create(client)
    async with test_session_factory() as session:
        note = await session.get(Note, UUID(note_id))
        note.title = "tampered"
        await session.commit()

    res = await client.get(f"/api/v1/notes/{note_id}", headers=ALICE)
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "CORRUPTED_NOTE"
    assert "tampered" not in res.text
