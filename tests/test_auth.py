from .conftest import DEFAULT_PASSWORD, create_mentor, signup


def test_signup_starts_session(client):
    user = signup(client, "New@Example.com", "mentee", full_name="New User")
    assert user["email"] == "new@example.com"
    assert user["role"] == "mentee"
    assert user["profile_id"] is None
    assert "mentor.sid" in client.cookies

    r = client.get("/api/auth/me")
    assert r.status_code == 200
    assert r.json()["email"] == "new@example.com"


def test_me_includes_profile_id(client):
    mentor = create_mentor(client)
    signup(client, "ada@example.com", "mentor")
    assert client.get("/api/auth/me").json()["profile_id"] == mentor["id"]


def test_duplicate_signup_is_conflict(client, make_client):
    signup(client, "dup@example.com", "mentor")
    r = make_client().post(
        "/api/auth/signup",
        json={"email": "dup@example.com", "password": DEFAULT_PASSWORD, "role": "mentee"},
    )
    assert r.status_code == 409


def test_signup_validation(client):
    r = client.post(
        "/api/auth/signup", json={"email": "a@example.com", "password": "short", "role": "mentee"}
    )
    assert r.status_code == 400
    r = client.post(
        "/api/auth/signup",
        json={"email": "a@example.com", "password": DEFAULT_PASSWORD, "role": "admin"},
    )
    assert r.status_code == 400


def test_login_and_logout(make_client):
    signup(make_client(), "user@example.com", "mentee")
    c = make_client()

    r = c.post("/api/auth/login", json={"email": "user@example.com", "password": "wrong-password"})
    assert r.status_code == 401
    assert c.get("/api/auth/me").status_code == 401

    r = c.post("/api/auth/login", json={"email": "USER@example.com", "password": DEFAULT_PASSWORD})
    assert r.status_code == 200
    assert c.get("/api/auth/me").status_code == 200

    assert c.post("/api/auth/logout").status_code == 200
    assert c.get("/api/auth/me").status_code == 401


def test_password_reset_flow(make_client, sent_emails):
    signup(make_client(), "forgetful@example.com", "mentor")
    c = make_client()

    r = c.post("/api/auth/forgot-password", json={"email": "forgetful@example.com"})
    assert r.status_code == 200
    assert len(sent_emails) == 1
    assert sent_emails[0]["to"] == "forgetful@example.com"
    token = sent_emails[0]["reset_link"].split("token=", 1)[1]

    r = c.post("/api/auth/reset-password", json={"token": token, "new_password": "brand-new-pass"})
    assert r.status_code == 200

    r = c.post(
        "/api/auth/login", json={"email": "forgetful@example.com", "password": "brand-new-pass"}
    )
    assert r.status_code == 200

    # Link is single use
    r = c.post("/api/auth/reset-password", json={"token": token, "new_password": "another-pass-1"})
    assert r.status_code == 400


def test_forgot_password_for_unknown_email_looks_the_same(client, sent_emails):
    r = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert r.status_code == 200
    assert sent_emails == []


def test_reset_with_bad_token(client):
    r = client.post(
        "/api/auth/reset-password", json={"token": "garbage", "new_password": "brand-new-pass"}
    )
    assert r.status_code == 400
