import json

from mentorconnect.models import Booking, Mentee, Notification
from mentorconnect.webhook_security import compute_hmac_sha256

from .conftest import request_booking


def booking_created(mentor_id, uid="cal-uid-1", email="max@example.com", name="Max Mentee"):
    return {
        "triggerEvent": "BOOKING_CREATED",
        "payload": {
            "uid": uid,
            "startTime": "2026-11-02T15:30:00Z",
            "attendees": [{"name": name, "email": email}],
            "metadata": {"mentorId": mentor_id},
        },
    }


def test_booking_created_confirms_latest_accepted_booking(client, mentor, db):
    mentor_client, profile = mentor
    booking = request_booking(client, profile["id"], mentee_email="max@example.com")
    mentor_client.patch(f"/api/bookings/{booking['id']}/accept")

    r = client.post("/api/webhooks/calcom", json=booking_created(profile["id"]))
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "booking_id": booking["id"], "created": False}

    assert db.query(Booking).count() == 1
    stored = db.query(Booking).one()
    assert stored.status == "confirmed"
    assert stored.cal_event_uri == "cal-uid-1"
    assert stored.scheduled_at.isoformat() == "2026-11-02T15:30:00"
    assert stored.confirmed_at is not None

    confirmed = db.query(Notification).filter(Notification.type == "booking_confirmed").all()
    assert {n.recipient_type for n in confirmed} == {"mentor", "mentee"}


def test_booking_created_without_accepted_request_creates_confirmed_booking(client, mentor, db):
    _, profile = mentor

    r = client.post(
        "/api/webhooks/calcom",
        json=booking_created(profile["id"], email="walkin@example.com", name="Walk In"),
    )
    assert r.status_code == 200
    assert r.json()["created"] is True

    mentee = db.query(Mentee).filter(Mentee.email == "walkin@example.com").one()
    assert mentee.name == "Walk In"
    stored = db.query(Booking).one()
    assert stored.status == "confirmed"
    assert stored.mentee_id == mentee.id


def test_pending_request_is_not_confirmed_by_webhook(client, mentor, db):
    _, profile = mentor
    pending = request_booking(client, profile["id"], mentee_email="max@example.com")

    r = client.post("/api/webhooks/calcom", json=booking_created(profile["id"]))
    assert r.json()["created"] is True
    assert db.query(Booking).filter(Booking.id == pending["id"]).one().status == "pending"
    assert db.query(Booking).count() == 2


def test_duplicate_delivery_is_ignored(client, mentor, db):
    _, profile = mentor
    first = client.post("/api/webhooks/calcom", json=booking_created(profile["id"])).json()
    notifications = db.query(Notification).count()

    second = client.post("/api/webhooks/calcom", json=booking_created(profile["id"]))
    assert second.status_code == 200
    assert second.json()["booking_id"] == first["booking_id"]
    assert second.json()["created"] is False
    assert db.query(Booking).count() == 1
    assert db.query(Notification).count() == notifications


def test_mentor_id_from_booking_responses(client, mentor, db):
    _, profile = mentor
    payload = booking_created(profile["id"])
    del payload["payload"]["metadata"]
    payload["payload"]["responses"] = {"mentor_id": {"value": profile["id"]}}

    r = client.post("/api/webhooks/calcom", json=payload)
    assert r.status_code == 200
    assert db.query(Booking).one().mentor_id == profile["id"]


def test_missing_mentor_id_is_400(client):
    payload = booking_created(None)
    payload["payload"]["metadata"] = {}
    assert client.post("/api/webhooks/calcom", json=payload).status_code == 400


def test_unknown_mentor_is_404(client, db):
    r = client.post("/api/webhooks/calcom", json=booking_created("nobody"))
    assert r.status_code == 404
    assert db.query(Booking).count() == 0


def test_booking_cancelled_cancels_matching_booking(client, mentor, db):
    _, profile = mentor
    client.post("/api/webhooks/calcom", json=booking_created(profile["id"]))

    r = client.post(
        "/api/webhooks/calcom",
        json={"triggerEvent": "BOOKING_CANCELLED", "payload": {"uid": "cal-uid-1"}},
    )
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    stored = db.query(Booking).one()
    assert stored.status == "canceled"
    assert stored.canceled_at is not None


def test_booking_cancelled_for_unknown_uid_is_ignored(client):
    r = client.post(
        "/api/webhooks/calcom",
        json={"triggerEvent": "BOOKING_CANCELLED", "payload": {"uid": "unknown"}},
    )
    assert r.status_code == 200
    assert r.json() == {"status": "ignored"}


def test_unhandled_event_is_ignored(client):
    r = client.post("/api/webhooks/calcom", json={"triggerEvent": "MEETING_ENDED", "payload": {}})
    assert r.status_code == 200
    assert r.json() == {"status": "ignored"}


def test_direct_payload_confirms_accepted_booking(client, mentor, mentee):
    mentor_client, mentor_profile = mentor
    mentee_client, mentee_profile = mentee
    booking = request_booking(mentee_client, mentor_profile["id"])
    mentor_client.patch(f"/api/bookings/{booking['id']}/accept")

    r = client.post(
        "/api/webhooks/calcom",
        json={
            "mentor_id": mentor_profile["id"],
            "mentee_id": mentee_profile["id"],
            "status": "scheduled",
            "scheduled_at": "2026-11-03T09:00:00",
        },
    )
    assert r.status_code == 200
    assert r.json()["booking_id"] == booking["id"]
    assert mentee_client.get(f"/api/bookings/{booking['id']}").json()["status"] == "confirmed"


def test_direct_payload_rejects_other_statuses(client, mentor, mentee):
    _, mentor_profile = mentor
    _, mentee_profile = mentee
    r = client.post(
        "/api/webhooks/calcom",
        json={
            "mentor_id": mentor_profile["id"],
            "mentee_id": mentee_profile["id"],
            "status": "completed",
        },
    )
    assert r.status_code == 400


def test_invalid_json_is_400(client):
    r = client.post(
        "/api/webhooks/calcom", content=b"not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400


def test_signature_required_when_secret_configured(client, monkeypatch):
    monkeypatch.setattr("mentorconnect.routes.calcom_webhooks.CALCOM_WEBHOOK_SECRET", "whsec_test")
    body = json.dumps({"triggerEvent": "PING", "payload": {}}).encode()

    r = client.post("/api/webhooks/calcom", content=body)
    assert r.status_code == 401

    r = client.post(
        "/api/webhooks/calcom", content=body, headers={"X-Cal-Signature-256": "deadbeef"}
    )
    assert r.status_code == 401

    signature = compute_hmac_sha256("whsec_test", body)
    r = client.post(
        "/api/webhooks/calcom", content=body, headers={"X-Cal-Signature-256": signature}
    )
    assert r.status_code == 200
    assert r.json() == {"status": "ignored"}


def test_non_object_booking_payload_is_400(client, db):
    r = client.post(
        "/api/webhooks/calcom", json={"triggerEvent": "BOOKING_CREATED", "payload": "oops"}
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request data"
    assert r.json()["errors"][0]["field"] == "payload"
    assert db.query(Booking).count() == 0


def test_non_object_attendee_is_400(client, mentor, db):
    _, profile = mentor
    payload = booking_created(profile["id"])
    payload["payload"]["attendees"] = ["x@y.com"]

    r = client.post("/api/webhooks/calcom", json=payload)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"].startswith("payload.attendees")
    assert db.query(Booking).count() == 0


def test_non_string_start_time_is_400(client, mentor, db):
    _, profile = mentor
    payload = booking_created(profile["id"])
    payload["payload"]["startTime"] = 1700000000

    r = client.post("/api/webhooks/calcom", json=payload)
    assert r.status_code == 400
    assert db.query(Booking).count() == 0


def test_direct_payload_with_numeric_scheduled_at_is_400(client, mentor, mentee, db):
    _, mentor_profile = mentor
    _, mentee_profile = mentee
    r = client.post(
        "/api/webhooks/calcom",
        json={
            "mentor_id": mentor_profile["id"],
            "mentee_id": mentee_profile["id"],
            "scheduled_at": 1700000000,
        },
    )
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "scheduled_at"
    assert db.query(Booking).count() == 0


def test_unparseable_start_time_is_400(client, mentor, db):
    _, profile = mentor
    payload = booking_created(profile["id"])
    payload["payload"]["startTime"] = "next tuesday"

    r = client.post("/api/webhooks/calcom", json=payload)
    assert r.status_code == 400
    assert db.query(Booking).count() == 0
