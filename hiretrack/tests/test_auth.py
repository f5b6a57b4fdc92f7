"""Tests for /api/auth and /api/users"""
from datetime import timedelta

from hiretrack.app.core.security import create_access_token
from hiretrack.app.models.user import User


def test_signup_returns_token_and_user(client, db_session):
    r = client.post(
        "/api/auth/signup",
        json={"email": "New.Person@Example.com", "password": "longenough", "firstName": "Ada", "lastName": "Byron"},
    )
    assert r.status_code == 201
    data = r.json()
    assert data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "new.person@example.com"
    assert data["user"]["firstName"] == "Ada"
    assert data["user"]["weeklySummary"] is True

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == data["user"]["id"]


def test_signup_duplicate_email_is_409(client):
    r = client.post("/api/auth/signup", json={"email": "test@example.com", "password": "longenough"})
    assert r.status_code == 409


def test_signup_short_password_is_422(client):
    r = client.post("/api/auth/signup", json={"email": "short@example.com", "password": "abc"})
    assert r.status_code == 422


def test_login_success_updates_last_login(client, test_user, db_session):
    assert test_user.last_login_at is None
    r = client.post("/api/auth/login", json={"email": "test@example.com", "password": "testpass123"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == test_user.id
    db_session.expire_all()
    assert db_session.get(User, test_user.id).last_login_at is not None


def test_login_wrong_password_is_401(client):
    r = client.post("/api/auth/login", json={"email": "test@example.com", "password": "wrongpass"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


def test_login_unknown_email_is_401(client):
    r = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "whatever1"})
    assert r.status_code == 401


def test_login_inactive_user_is_401(client, test_user, db_session):
    test_user.is_active = False
    db_session.commit()
    r = client.post("/api/auth/login", json={"email": "test@example.com", "password": "testpass123"})
    assert r.status_code == 401


def test_me_requires_valid_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_me_rejects_expired_token(client, test_user):
    token = create_access_token({"sub": str(test_user.id)}, expires_delta=timedelta(minutes=-5))
    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_refresh_accepts_expired_token(client, test_user):
    token = create_access_token({"sub": str(test_user.id)}, expires_delta=timedelta(minutes=-5))
    r = client.post("/api/auth/refresh", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    fresh = r.json()["access_token"]
    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {fresh}"}).status_code == 200


def test_update_profile(client, auth_headers):
    r = client.patch("/api/users/profile", json={"firstName": " Grace ", "lastName": "Hopper"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["firstName"] == "Grace"
    assert r.json()["lastName"] == "Hopper"
    assert client.get("/api/users/profile", headers=auth_headers).json()["firstName"] == "Grace"


def test_update_notification_preferences(client, auth_headers, test_user, db_session):
    r = client.patch("/api/users/notifications", json={"weeklySummary": False}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["weeklySummary"] is False
    db_session.expire_all()
    assert db_session.get(User, test_user.id).weekly_summary is False


def test_root_and_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200
