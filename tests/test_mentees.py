from .conftest import create_mentee, create_mentor, request_booking, signup


def test_register_mentee(client):
    mentee = create_mentee(client, email="Max@Example.com")
    assert mentee["email"] == "max@example.com"
    assert mentee["user_type"] == "individual"
    assert mentee["organization_name"] is None


def test_duplicate_mentee_is_conflict(client):
    create_mentee(client)
    r = client.post("/api/mentees", json={"name": "Again", "email": "max@example.com"})
    assert r.status_code == 409


def test_organization_requires_name(client):
    r = client.post(
        "/api/mentees",
        json={"name": "Acme Team", "email": "team@acme.com", "user_type": "organization"},
    )
    assert r.status_code == 400

    mentee = create_mentee(
        client,
        name="Acme Team",
        email="team@acme.com",
        user_type="organization",
        organization_name="Acme",
    )
    assert mentee["organization_name"] == "Acme"


def test_get_mentee_requires_session(client, mentee):
    assert client.get("/api/mentees/max@example.com").status_code == 401

    mentee_client, profile = mentee
    r = mentee_client.get("/api/mentees/max@example.com")
    assert r.status_code == 200
    assert r.json()["id"] == profile["id"]
    assert mentee_client.get("/api/mentees/nobody@example.com").status_code == 404


def test_owner_updates_profile(mentee):
    mentee_client, profile = mentee
    r = mentee_client.patch(
        f"/api/mentees/{profile['id']}",
        json={"timezone": "America/New_York", "areas_exploring": ["Leadership"]},
    )
    assert r.status_code == 200
    assert r.json()["timezone"] == "America/New_York"
    assert r.json()["areas_exploring"] == ["Leadership"]


def test_switching_to_organization_requires_name(mentee):
    mentee_client, profile = mentee
    r = mentee_client.patch(f"/api/mentees/{profile['id']}", json={"user_type": "organization"})
    assert r.status_code == 400


def test_other_user_cannot_update_or_list(mentee, make_client):
    _, profile = mentee
    other = make_client()
    signup(other, "other@example.com", "mentee")

    assert other.patch(f"/api/mentees/{profile['id']}", json={"bio": "x"}).status_code == 403
    assert other.get("/api/mentees/max@example.com/bookings").status_code == 403
    assert other.get("/api/mentees/max@example.com/favorites").status_code == 403


def test_mentee_bookings(mentee, client):
    mentee_client, _ = mentee
    mentor = create_mentor(client)
    booking = request_booking(mentee_client, mentor["id"])

    r = mentee_client.get("/api/mentees/max@example.com/bookings")
    assert r.status_code == 200
    assert [b["id"] for b in r.json()] == [booking["id"]]


def test_favorites(mentee, client):
    mentee_client, _ = mentee
    mentor = create_mentor(client)
    url = "/api/mentees/max@example.com/favorites"

    r = mentee_client.post(url, json={"mentor_id": mentor["id"]})
    assert r.status_code == 201
    assert r.json()["mentor"]["name"] == "Ada Lovelace"

    assert mentee_client.post(url, json={"mentor_id": mentor["id"]}).status_code == 409
    assert mentee_client.post(url, json={"mentor_id": "missing"}).status_code == 404

    favorites = mentee_client.get(url).json()
    assert [f["mentor_id"] for f in favorites] == [mentor["id"]]

    assert mentee_client.delete(f"{url}/{mentor['id']}").status_code == 204
    assert mentee_client.get(url).json() == []
    assert mentee_client.delete(f"{url}/{mentor['id']}").status_code == 404
