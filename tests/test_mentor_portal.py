from datetime import datetime

import pytest

from .conftest import create_mentor, request_booking, signup


@pytest.fixture
def portal(mentor):
    mentor_client, profile = mentor
    return mentor_client, f"/api/mentor/{profile['id']}"


def test_portal_is_owner_only(mentor, make_client):
    _, profile = mentor
    other = make_client()
    create_mentor(other, name="Grace Hopper", email="grace@example.com")
    signup(other, "grace@example.com", "mentor")

    assert other.get(f"/api/mentor/{profile['id']}/dashboard").status_code == 403

    mentee_client = make_client()
    signup(mentee_client, "max@example.com", "mentee")
    assert mentee_client.get(f"/api/mentor/{profile['id']}/dashboard").status_code == 403


def test_portal_requires_session(client, mentor):
    _, profile = mentor
    assert client.get(f"/api/mentor/{profile['id']}/bookings").status_code == 401


def test_dashboard_stats(portal, client, mentor):
    mentor_client, base = portal
    _, profile = mentor

    accepted = request_booking(client, profile["id"], mentee_email="one@example.com")
    request_booking(client, profile["id"], mentee_email="two@example.com")
    completed = request_booking(client, profile["id"], mentee_email="three@example.com")
    mentor_client.patch(f"/api/bookings/{accepted['id']}/accept")
    mentor_client.patch(f"/api/bookings/{completed['id']}/accept")
    mentor_client.patch(f"{base}/bookings/{completed['id']}", json={"status": "completed"})

    mentor_client.post(f"{base}/earnings", json={"amount": 100.5})
    mentor_client.post(f"{base}/earnings", json={"amount": 50, "payout_month": "2020-01"})

    r = mentor_client.get(f"{base}/dashboard")
    assert r.status_code == 200
    assert r.json() == {
        "totalSessions": 2,
        "completedSessions": 1,
        "pendingBookings": 1,
        "averageRating": 0.0,
        "feedbackCount": 0,
        "totalEarnings": 150.5,
        "monthlyEarnings": 100.5,
    }


def test_portal_bookings_and_status_changes(portal, client, mentor):
    mentor_client, base = portal
    _, profile = mentor
    booking = request_booking(client, profile["id"], mentee_email="max@example.com")

    assert [b["id"] for b in mentor_client.get(f"{base}/bookings").json()] == [booking["id"]]
    assert mentor_client.get(f"{base}/bookings?status=accepted").json() == []
    assert mentor_client.get(f"{base}/bookings?status=bogus").status_code == 400

    r = mentor_client.patch(f"{base}/bookings/{booking['id']}", json={"status": "completed"})
    assert r.status_code == 400

    r = mentor_client.patch(f"{base}/bookings/{booking['id']}", json={"status": "accepted"})
    assert r.status_code == 200
    assert r.json()["status"] == "accepted"

    r = mentor_client.patch(f"{base}/bookings/{booking['id']}", json={"status": "canceled"})
    assert r.status_code == 200
    assert r.json()["canceled_at"] is not None

    r = mentor_client.patch(f"{base}/bookings/{booking['id']}", json={"status": "pending"})
    assert r.status_code == 400


def test_feedback_list(portal, mentor, mentee):
    mentor_client, base = portal
    _, profile = mentor
    mentee_client, _ = mentee
    booking = request_booking(mentee_client, profile["id"])
    mentee_client.post(f"/api/bookings/{booking['id']}/feedback", json={"rating": 4, "feedback": "Useful"})

    feedback = mentor_client.get(f"{base}/feedback").json()
    assert len(feedback) == 1
    assert feedback[0]["bookingId"] == booking["id"]
    assert feedback[0]["menteeName"] == "Max Mentee"
    assert feedback[0]["rating"] == 4
    assert feedback[0]["feedback"] == "Useful"


def test_tasks_crud(portal):
    mentor_client, base = portal

    r = mentor_client.post(
        f"{base}/tasks",
        json={"title": "Prepare reading list", "priority": "high", "due_date": "2026-11-05T12:00:00"},
    )
    assert r.status_code == 201
    task = r.json()
    assert task["status"] == "pending"
    assert task["priority"] == "high"

    r = mentor_client.patch(f"{base}/tasks/{task['id']}", json={"status": "in_progress"})
    assert r.status_code == 200
    assert r.json()["status"] == "in_progress"
    assert r.json()["title"] == "Prepare reading list"

    assert [t["id"] for t in mentor_client.get(f"{base}/tasks").json()] == [task["id"]]
    assert mentor_client.get(f"{base}/tasks?status=completed").json() == []

    assert mentor_client.delete(f"{base}/tasks/{task['id']}").status_code == 204
    assert mentor_client.delete(f"{base}/tasks/{task['id']}").status_code == 404


def test_task_validation(portal):
    mentor_client, base = portal
    assert mentor_client.post(f"{base}/tasks", json={"title": "x", "priority": "urgent"}).status_code == 400
    assert mentor_client.post(f"{base}/tasks", json={"title": "x", "booking_id": "nope"}).status_code == 404


def test_availability_is_replaced_in_bulk(portal):
    mentor_client, base = portal

    r = mentor_client.put(
        f"{base}/availability",
        json={
            "slots": [
                {"day_of_week": 3, "start_time": "14:00", "end_time": "16:00"},
                {"day_of_week": 1, "start_time": "09:00", "end_time": "11:30"},
            ]
        },
    )
    assert r.status_code == 200
    assert [(s["day_of_week"], s["start_time"]) for s in r.json()] == [(1, "09:00"), (3, "14:00")]

    r = mentor_client.put(
        f"{base}/availability",
        json={"slots": [{"day_of_week": 5, "start_time": "10:00", "end_time": "12:00"}]},
    )
    assert r.status_code == 200
    slots = mentor_client.get(f"{base}/availability").json()
    assert [(s["day_of_week"], s["end_time"]) for s in slots] == [(5, "12:00")]


@pytest.mark.parametrize(
    "slot",
    [
        {"day_of_week": 7, "start_time": "10:00", "end_time": "11:00"},
        {"day_of_week": 1, "start_time": "25:00", "end_time": "26:00"},
        {"day_of_week": 1, "start_time": "12:00", "end_time": "09:00"},
    ],
)
def test_invalid_availability_is_rejected(portal, slot):
    mentor_client, base = portal
    assert mentor_client.put(f"{base}/availability", json={"slots": [slot]}).status_code == 400


def test_earnings(portal):
    mentor_client, base = portal

    r = mentor_client.post(f"{base}/earnings", json={"amount": 75.25, "currency": "eur"})
    assert r.status_code == 201
    earning = r.json()
    assert earning["amount"] == 75.25
    assert earning["currency"] == "EUR"
    assert earning["payout_status"] == "pending"
    assert earning["payout_month"] == datetime.utcnow().strftime("%Y-%m")

    r = mentor_client.patch(f"{base}/earnings/{earning['id']}", json={"payout_status": "paid"})
    assert r.status_code == 200
    assert r.json()["payout_status"] == "paid"

    assert mentor_client.patch(f"{base}/earnings/{earning['id']}", json={"payout_status": "lost"}).status_code == 400
    assert mentor_client.patch(f"{base}/earnings/missing", json={"payout_status": "paid"}).status_code == 404
    assert mentor_client.post(f"{base}/earnings", json={"amount": -5}).status_code == 400
    assert len(mentor_client.get(f"{base}/earnings").json()) == 1


def test_activity_log(portal, client, mentor):
    mentor_client, base = portal
    _, profile = mentor
    booking = request_booking(client, profile["id"], mentee_email="max@example.com")
    mentor_client.patch(f"/api/bookings/{booking['id']}/accept")

    activity = mentor_client.get(f"{base}/activity").json()
    assert {a["activity_type"] for a in activity} == {"booking_requested", "booking_accepted"}
    assert all(a["booking_id"] == booking["id"] for a in activity)
    assert len(mentor_client.get(f"{base}/activity?limit=1").json()) == 1
