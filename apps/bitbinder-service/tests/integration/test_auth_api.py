from datetime import timedelta

from bitbinder.db import models


def test_register_login_me_logout(client):
    r = client.post("/auth/register", json={"username": "  Bob ", "password": "pass"})
    assert r.status_code == 201, r.text
    assert r.json()["username"] == "bob"
    assert r.json()["message"] == "Account created! You can now log in."

    r = client.post("/auth/login", json={"username": "BOB", "password": "pass"})
    assert r.status_code == 200, r.text
    token = r.json()["token"]
    assert token.startswith("bb_sess_")
    headers = {"Authorization": f"Bearer {token}"}

    r = client.get("/auth/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["username"] == "bob"

    # X-Session-Token works too
    r = client.get("/auth/me", headers={"X-Session-Token": token})
    assert r.status_code == 200

    r = client.post("/auth/logout", headers=headers)
    assert r.status_code == 204
    r = client.get("/auth/me", headers=headers)
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated. Please log in."


def test_register_validation_messages(client):
    cases = [
        ({"username": "   ", "password": "pass"}, "Username cannot be empty."),
        ({"username": "ab", "password": "pass"}, "Username must be at least 3 characters."),
        ({"username": "abc", "password": "123"}, "Password must be at least 4 characters."),
        ({"username": "abc", "password": "1234", "confirm_password": "12345"}, "Passwords do not match."),
    ]
    for payload, message in cases:
        r = client.post("/auth/register", json=payload)
        assert r.status_code == 422, r.text
        assert r.json()["detail"] == message


def test_duplicate_username(client):
    assert client.post("/auth/register", json={"username": "carol", "password": "pass"}).status_code == 201
    r = client.post("/auth/register", json={"username": "CAROL ", "password": "other"})
    assert r.status_code == 409
    assert r.json()["detail"] == "Username already taken."


def test_login_errors(client):
    r = client.post("/auth/login", json={"username": "ghost", "password": "pass"})
    assert r.status_code == 401
    assert r.json()["detail"] == "User not found."
    client.post("/auth/register", json={"username": "dave", "password": "pass"})
    r = client.post("/auth/login", json={"username": "dave", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Incorrect password."


def test_bad_tokens_rejected(client, auth_headers):
    auth_headers()
    for token in ("garbage", "bb_sess_deadbeef_secret", "bb_sess_"):
        r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401, token
    assert client.get("/auth/me").status_code == 401


def test_tampered_secret_rejected(client, auth_headers):
    headers = auth_headers()
    tampered = headers["Authorization"] + "x"
    r = client.get("/auth/me", headers={"Authorization": tampered})
    assert r.status_code == 401


def test_session_ttl_sets_expiry(client, monkeypatch):
    monkeypatch.setenv("SESSION_TTL_HOURS", "2")
    client.post("/auth/register", json={"username": "erin", "password": "pass"})
    r = client.post("/auth/login", json={"username": "erin", "password": "pass"})
    assert r.json()["expires_at"] is not None


def test_write_without_token_blocked_by_middleware(client):
    r = client.post("/jokes/", json={"title": "x"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated. Please log in."


def test_expired_session_rejected(client, auth_headers, db_session):
    headers = auth_headers()
    assert client.get("/auth/me", headers=headers).status_code == 200

    db_session.query(models.UserSession).update(
        {models.UserSession.expires_at: models.now_utc() - timedelta(minutes=1)}
    )
    db_session.commit()

    r = client.get("/auth/me", headers=headers)
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated. Please log in."
