import pytest

from .conftest import request_booking, signup


@pytest.fixture
def booking(mentor, mentee):
    _, mentor_profile = mentor
    mentee_client, _ = mentee
    return request_booking(mentee_client, mentor_profile["id"])


def test_participants_share_notes(mentor, mentee, booking):
    mentor_client, _ = mentor
    mentee_client, _ = mentee
    url = f"/api/bookings/{booking['id']}/notes"

    r = mentee_client.post(url, json={"content": "Agenda: promotion case"})
    assert r.status_code == 201
    assert r.json()["author_type"] == "mentee"
    assert r.json()["note_type"] == "note"

    r = mentor_client.post(url, json={"content": "Read the staff eng guide", "note_type": "task"})
    assert r.status_code == 201
    assert r.json()["author_type"] == "mentor"

    notes = mentee_client.get(url).json()
    assert {n["content"] for n in notes} == {"Agenda: promotion case", "Read the staff eng guide"}


def test_other_participant_can_complete_task_but_not_reword(mentor, mentee, booking):
    mentor_client, _ = mentor
    mentee_client, _ = mentee
    url = f"/api/bookings/{booking['id']}/notes"
    task = mentor_client.post(url, json={"content": "Draft a brag doc", "note_type": "task"}).json()

    r = mentee_client.patch(f"{url}/{task['id']}", json={"is_completed": True})
    assert r.status_code == 200
    assert r.json()["is_completed"] is True

    r = mentee_client.patch(f"{url}/{task['id']}", json={"content": "Skip it"})
    assert r.status_code == 403

    r = mentor_client.patch(f"{url}/{task['id']}", json={"content": "Draft a brag doc by Friday"})
    assert r.status_code == 200
    assert r.json()["content"] == "Draft a brag doc by Friday"


def test_only_author_deletes(mentor, mentee, booking):
    mentor_client, _ = mentor
    mentee_client, _ = mentee
    url = f"/api/bookings/{booking['id']}/notes"
    note = mentee_client.post(url, json={"content": "Private thoughts"}).json()

    assert mentor_client.delete(f"{url}/{note['id']}").status_code == 403
    assert mentee_client.delete(f"{url}/{note['id']}").status_code == 204
    assert mentee_client.get(url).json() == []


def test_outsiders_cannot_read_or_write(booking, make_client):
    outsider = make_client()
    signup(outsider, "outsider@example.com", "mentor")
    url = f"/api/bookings/{booking['id']}/notes"

    assert outsider.get(url).status_code == 403
    assert outsider.post(url, json={"content": "hello"}).status_code == 403


def test_empty_note_is_rejected(mentee, booking):
    mentee_client, _ = mentee
    r = mentee_client.post(f"/api/bookings/{booking['id']}/notes", json={"content": "   "})
    assert r.status_code == 400


def test_notes_for_missing_booking(mentee):
    mentee_client, _ = mentee
    assert mentee_client.get("/api/bookings/missing/notes").status_code == 404
