import os
import tempfile

# Configure the app for an isolated SQLite database before it is imported
_TEST_DIR = tempfile.mkdtemp(prefix="mentorconnect-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_DIR, "uploads")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["CALCOM_WEBHOOK_SECRET"] = ""
os.environ["RESEND_API_KEY"] = ""
os.environ["REDIS_URL"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from mentorconnect.database import Base, SessionLocal, engine  # noqa: E402
from mentorconnect.main import app  # noqa: E402

DEFAULT_PASSWORD = "correct-horse-42"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Capture outbound email instead of calling Resend"""
    sent = []

    async def _fake_booking_accepted(**kwargs):
        sent.append({"kind": "booking_accepted", **kwargs})
        return {"id": "test"}

    async def _fake_password_reset(**kwargs):
        sent.append({"kind": "password_reset", **kwargs})
        return {"id": "test"}

    monkeypatch.setattr(
        "mentorconnect.domain.bookings.service.send_booking_accepted_email", _fake_booking_accepted
    )
    monkeypatch.setattr(
        "mentorconnect.routes.auth.send_password_reset_email", _fake_password_reset
    )
    return sent


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_client():
    """Each client keeps its own session cookie"""
    clients = []

    def _make() -> TestClient:
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def client(make_client):
    return make_client()


def signup(client, email, role, full_name=None, password=DEFAULT_PASSWORD):
    r = client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "role": role, "full_name": full_name},
    )
    assert r.status_code == 201, r.text
    return r.json()


def create_mentor(client, **overrides):
    payload = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "company": "Analytical Engines",
        "position": "Chief Scientist",
        "bio": "Twenty years of engineering leadership.",
        "expertise": ["Leadership", "Product Strategy"],
        "industries": ["Technology"],
        "languages_spoken": ["English", "French"],
        "timezone": "Europe/London",
        "calendly_link": "https://cal.com/ada",
    }
    payload.update(overrides)
    r = client.post("/api/mentors", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def create_mentee(client, **overrides):
    payload = {
        "name": "Max Mentee",
        "email": "max@example.com",
        "areas_exploring": ["Career Development"],
    }
    payload.update(overrides)
    r = client.post("/api/mentees", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def mentor(make_client):
    """A mentor profile with a signed-in mentor client: (client, profile)"""
    c = make_client()
    profile = create_mentor(c)
    signup(c, profile["email"], "mentor", full_name=profile["name"])
    return c, profile


@pytest.fixture
def mentee(make_client):
    """A mentee profile with a signed-in mentee client: (client, profile)"""
    c = make_client()
    profile = create_mentee(c)
    signup(c, profile["email"], "mentee", full_name=profile["name"])
    return c, profile


def request_booking(client, mentor_id, **extra):
    r = client.post("/api/bookings/request", json={"mentor_id": mentor_id, **extra})
    assert r.status_code == 201, r.text
    return r.json()
