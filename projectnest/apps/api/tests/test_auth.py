"""
Tests for registration, login and token handling.
"""

from datetime import timedelta
from types import SimpleNamespace
import uuid

from core.auth import create_access_token, decode_token, hash_password, verify_password


def test_register_returns_token(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ada", "email": "Ada@Example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == 24 * 3600
    assert data["user"]["email"] == "ada@example.com"
    assert "password_hash" not in data["user"]


def test_register_duplicate_email(client, register_user):
    register_user(email="dup@example.com")
    response = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "DUP@example.com", "password": "secret123"},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"


def test_register_validation_is_400(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "A", "email": "not-an-email", "password": "123"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_login_and_me(client, register_user):
    register_user(name="Grace", email="grace@example.com", password="hopper123")

    response = client.post(
        "/api/auth/login",
        json={"email": "grace@example.com", "password": "hopper123"},
    )
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Grace"


def test_login_wrong_password(client, register_user):
    register_user(email="grace@example.com", password="hopper123")
    response = client.post(
        "/api/auth/login",
        json={"email": "grace@example.com", "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


def test_login_unknown_email_same_error(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "whatever"},
    )
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


def test_missing_token_is_401(client):
    response = client.get("/api/projects")
    assert response.status_code == 401


def test_garbage_token_is_401(client):
    response = client.get("/api/projects", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


def test_expired_token_is_401(client):
    user = SimpleNamespace(
        id=1, user_uid=uuid.uuid4(), email="old@example.com", name="Old"
    )
    token = create_access_token(user, expires_delta=timedelta(seconds=-10))
    response = client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"


def test_token_for_unknown_user_is_401(client):
    user = SimpleNamespace(
        id=999, user_uid=uuid.uuid4(), email="ghost@example.com", name="Ghost"
    )
    token = create_access_token(user)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_claims():
    user = SimpleNamespace(id=7, user_uid=uuid.uuid4(), email="c@example.com", name="C")
    payload = decode_token(create_access_token(user))
    assert payload["user_id"] == 7
    assert payload["user_uid"] == str(user.user_uid)
    assert payload["sub"] == str(user.user_uid)
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 24 * 3600


def test_password_hashing():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("battery staple", hashed)
