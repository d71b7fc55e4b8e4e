import pytest

INVALID = {"success": False, "message": "Invalid credentials"}


def test_login_success(client):
    resp = client.post("/api/login", json={"username": "testuser", "password": "testpass"})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": "Login successful",
        "user": {"username": "testuser", "id": 1},
    }


@pytest.mark.parametrize(
    "body",
    [
        {"username": "invaliduser", "password": "testpass"},
        {"username": "testuser", "password": "invalidpass"},
        {"password": "testpass"},
        {"username": "testuser"},
        {"username": "", "password": ""},
        {"username": 1, "password": 2},
        {},
        ["testuser", "testpass"],
    ],
)
def test_login_failures_look_identical(client, body):
    resp = client.post("/api/login", json=body)
    assert resp.status_code == 401
    assert resp.json() == INVALID


def test_login_without_body(client):
    resp = client.post("/api/login")
    assert resp.status_code == 401
    assert resp.json() == INVALID


def test_login_does_not_set_cookies(client):
    resp = client.post("/api/login", json={"username": "testuser", "password": "testpass"})
    assert "set-cookie" not in resp.headers
