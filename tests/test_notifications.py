import pytest

from .conftest import request_booking, signup


@pytest.fixture
def inbox(client, mentor):
    """Mentor client with three booking-request notifications"""
    mentor_client, profile = mentor
    for i in range(3):
        request_booking(client, profile["id"], mentee_email=f"mentee{i}@example.com")
    return mentor_client


def test_list_notifications(inbox):
    r = inbox.get("/api/notifications")
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 3
    assert data["unread_count"] == 3
    assert len(data["notifications"]) == 3
    assert {n["type"] for n in data["notifications"]} == {"booking_request"}


def test_pagination(inbox):
    data = inbox.get("/api/notifications?limit=2&offset=0").json()
    assert len(data["notifications"]) == 2
    assert data["total"] == 3


def test_unread_count_and_mark_read(inbox):
    assert inbox.get("/api/notifications/unread-count").json() == {"count": 3}

    first = inbox.get("/api/notifications").json()["notifications"][0]
    r = inbox.patch(f"/api/notifications/{first['id']}/read")
    assert r.status_code == 200
    assert r.json()["is_read"] is True

    assert inbox.get("/api/notifications/unread-count").json() == {"count": 2}
    unread = inbox.get("/api/notifications?unread_only=true").json()["notifications"]
    assert first["id"] not in {n["id"] for n in unread}


def test_mark_all_read(inbox):
    r = inbox.patch("/api/notifications/read-all")
    assert r.status_code == 200
    assert r.json()["updated"] == 3
    assert inbox.get("/api/notifications/unread-count").json() == {"count": 0}


def test_delete_notification(inbox):
    first = inbox.get("/api/notifications").json()["notifications"][0]
    r = inbox.delete(f"/api/notifications/{first['id']}")
    assert r.status_code == 204
    assert inbox.get("/api/notifications").json()["total"] == 2
    assert inbox.delete(f"/api/notifications/{first['id']}").status_code == 404


def test_notifications_are_private(inbox, make_client):
    first = inbox.get("/api/notifications").json()["notifications"][0]

    other = make_client()
    signup(other, "nosy@example.com", "mentee")
    assert other.get("/api/notifications").json()["total"] == 0
    assert other.patch(f"/api/notifications/{first['id']}/read").status_code == 404
    assert other.delete(f"/api/notifications/{first['id']}").status_code == 404


def test_notifications_require_session(client):
    r = client.get("/api/notifications")
    assert r.status_code == 401
    assert r.json() == {"message": "Not authenticated"}
