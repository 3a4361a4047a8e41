from .conftest import signup

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_requires_session(client):
    r = client.post("/api/uploads", files={"file": ("me.png", PNG_BYTES, "image/png")})
    assert r.status_code == 401


def test_upload_image_and_serve_it(client):
    signup(client, "photo@example.com", "mentor")

    r = client.post("/api/uploads", files={"file": ("../../me.png", PNG_BYTES, "image/png")})
    assert r.status_code == 201
    url = r.json()["url"]
    assert url.startswith("/uploads/")
    assert url.endswith(".png")
    assert ".." not in url

    r = client.get(url)
    assert r.status_code == 200
    assert r.content == PNG_BYTES


def test_non_image_is_rejected(client):
    signup(client, "photo@example.com", "mentor")
    r = client.post("/api/uploads", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert r.status_code == 400


def test_oversized_image_is_rejected(client):
    signup(client, "photo@example.com", "mentor")
    big = b"\x00" * (5 * 1024 * 1024 + 1)
    r = client.post("/api/uploads", files={"file": ("big.jpg", big, "image/jpeg")})
    assert r.status_code == 400
    assert "5MB" in r.json()["message"]
