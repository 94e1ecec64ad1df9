from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from truckmarket.app import app

client = TestClient(app)


def _email() -> str:
    return f"{uuid.uuid4().hex[:8]}@example.com"


def _login_user(c):
    c.post("/api/auth/login", json={"email": "user@hacktruck.id", "password": "user123"})


# ── Register ─────────────────────────────────────────────────────────────


def test_register_logs_in():
    c = TestClient(app)
    email = _email()
    resp = c.post("/api/auth/register", json={
        "email": email, "password": "secret123", "role": "driver", "name": "Budi",
    })
    assert resp.status_code == 201
    user = resp.json()["user"]
    assert user["email"] == email
    assert user["role"] == "driver"
    assert "password_hash" not in user
    assert c.get("/api/auth/me").json()["id"] == user["id"]


def test_register_duplicate_email():
    resp = client.post("/api/auth/register", json={
        "email": "user@hacktruck.id", "password": "secret123",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already exists"


def test_register_rejects_unknown_role():
    resp = client.post("/api/auth/register", json={
        "email": _email(), "password": "secret123", "role": "admin",
    })
    assert resp.status_code == 422


def test_register_rejects_short_password():
    resp = client.post("/api/auth/register", json={"email": _email(), "password": "123"})
    assert resp.status_code == 422


# ── Login / Logout ───────────────────────────────────────────────────────


def test_login_success():
    resp = client.post("/api/auth/login", json={"email": "driver@hacktruck.id", "password": "driver123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["user"]["role"] == "driver"


def test_login_is_case_insensitive_on_email():
    resp = client.post("/api/auth/login", json={"email": "User@HackTruck.id", "password": "user123"})
    assert resp.status_code == 200


def test_login_wrong_password():
    resp = client.post("/api/auth/login", json={"email": "user@hacktruck.id", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_user():
    resp = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_auth_me_not_logged_in():
    c = TestClient(app)
    assert c.get("/api/auth/me").status_code == 401


def test_logout():
    _login_user(client)
    resp = client.post("/api/auth/logout")
    assert resp.json()["status"] == "logged_out"
    assert client.get("/api/auth/me").status_code == 401


# ── Account management ───────────────────────────────────────────────────


def test_change_password():
    c = TestClient(app)
    email = _email()
    c.post("/api/auth/register", json={"email": email, "password": "first123"})

    bad = c.post("/api/auth/change-password", json={
        "currentPassword": "wrong", "newPassword": "second123",
    })
    assert bad.status_code == 401

    ok = c.post("/api/auth/change-password", json={
        "currentPassword": "first123", "newPassword": "second123",
    })
    assert ok.status_code == 200

    fresh = TestClient(app)
    assert fresh.post("/api/auth/login", json={"email": email, "password": "first123"}).status_code == 401
    assert fresh.post("/api/auth/login", json={"email": email, "password": "second123"}).status_code == 200


def test_profile_update():
    c = TestClient(app)
    c.post("/api/auth/register", json={"email": _email(), "password": "secret123"})
    new_email = _email()

    resp = c.post("/api/auth/profile/update", json={"name": "Siti", "email": new_email})

    assert resp.status_code == 200
    assert resp.json()["name"] == "Siti"
    assert c.get("/api/auth/me").json()["email"] == new_email


def test_profile_update_email_taken():
    c = TestClient(app)
    c.post("/api/auth/register", json={"email": _email(), "password": "secret123"})
    resp = c.post("/api/auth/profile/update", json={"email": "driver@hacktruck.id"})
    assert resp.status_code == 400


def test_account_routes_require_login():
    c = TestClient(app)
    assert c.post("/api/auth/profile/update", json={"name": "x"}).status_code == 401
    assert c.post("/api/auth/change-password", json={
        "currentPassword": "a", "newPassword": "bbbbbb",
    }).status_code == 401


# ── Role checks ──────────────────────────────────────────────────────────


def test_driver_routes_reject_customer_accounts():
    c = TestClient(app)
    _login_user(c)
    assert c.get("/api/posts/driver").status_code == 403


def test_driver_routes_allow_drivers():
    c = TestClient(app)
    c.post("/api/auth/login", json={"email": "driver@hacktruck.id", "password": "driver123"})
    assert c.get("/api/posts/driver").status_code == 200


def test_driver_routes_require_login():
    assert TestClient(app).get("/api/posts/driver").status_code == 401
