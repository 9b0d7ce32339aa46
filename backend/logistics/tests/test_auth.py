"""
Tests for authentication endpoints.
"""
from datetime import timedelta
import pytest
from sqlalchemy.orm import Query
from logistics.core.exceptions import InvalidInputError
from logistics.core.security import create_access_token
from logistics.core.utils import utcnow
from logistics.models.user import User, UserToken
from logistics.services import user_service


def signup(client, email="test@example.com", password="testpassword123"):
    return client.post(
        "/api/auth/signup",
        json={
            "email": email,
            "password": password,
            "first_name": "Test",
            "last_name": "User",
            "home_location": "Ogle"
        }
    )


def test_signup(client):
    """Test user signup."""
    response = signup(client)
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "test@example.com"
    assert body["is_admin"] is False
    assert body["is_verified"] is False
    assert "hashed_password" not in body
    assert "password" not in body
    assert "tokens" not in body


def test_signup_duplicate_email(client):
    signup(client)
    response = signup(client)
    assert response.status_code == 400


def test_login(client, db):
    """Test user login records the issued token."""
    signup(client, email="test2@example.com")

    response = client.post(
        "/api/auth/login",
        json={"email": "test2@example.com", "password": "testpassword123"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    user = db.query(User).filter(User.email == "test2@example.com").first()
    assert db.query(UserToken).filter(UserToken.user_id == user.id, UserToken.token == token).count() == 1


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@example.com", "password": "wrongpassword"}
    )
    assert response.status_code == 401


def test_missing_and_malformed_tokens_rejected(client):
    assert client.get("/api/users/me").status_code == 401
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_expired_token_rejected(client, create_user, db):
    user = create_user("late@example.com")
    token = create_access_token({"sub": user.email, "user_id": user.id}, expires_delta=timedelta(seconds=-1))
    db.add(UserToken(user_id=user.id, token=token))
    db.commit()

    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_valid_token_not_issued_by_login_rejected(client, create_user):
    user = create_user("forged@example.com")
    token = create_access_token({"sub": user.email, "user_id": user.id})

    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_logout_revokes_token(client, user_headers):
    assert client.get("/api/users/me", headers=user_headers).status_code == 200

    response = client.post("/api/auth/logout", headers=user_headers)
    assert response.status_code == 200

    assert client.get("/api/users/me", headers=user_headers).status_code == 401


def test_logout_keeps_other_sessions(client, create_user, login):
    create_user("multi@example.com")
    first = login("multi@example.com")
    second = login("multi@example.com")

    client.post("/api/auth/logout", headers=first)

    assert client.get("/api/users/me", headers=first).status_code == 401
    assert client.get("/api/users/me", headers=second).status_code == 200


def test_verify_email(client, db):
    signup(client, email="verify@example.com")
    user = db.query(User).filter(User.email == "verify@example.com").first()
    token = user.verification_token
    assert token

    response = client.post("/api/auth/verify", json={"token": token})
    assert response.status_code == 200
    assert response.json()["is_verified"] is True

    # Tokens are single use
    assert client.post("/api/auth/verify", json={"token": token}).status_code == 400


def test_password_reset(client, db, create_user, login):
    create_user("reset@example.com")
    old_headers = login("reset@example.com")

    response = client.post("/api/auth/forgot-password", json={"email": "reset@example.com"})
    assert response.status_code == 200

    user = db.query(User).filter(User.email == "reset@example.com").first()
    db.refresh(user)
    response = client.post(
        "/api/auth/reset-password",
        json={"token": user.reset_token, "new_password": "brand-new-password"}
    )
    assert response.status_code == 200

    # Existing sessions are revoked and the new password works
    assert client.get("/api/users/me", headers=old_headers).status_code == 401
    login("reset@example.com", password="brand-new-password")


def test_forgot_password_unknown_email_looks_the_same(client):
    response = client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})
    assert response.status_code == 200


def test_expired_reset_token_rejected(client, db, create_user):
    user = create_user("stale@example.com")
    user.reset_token = "stale-token"
    user.reset_token_expires_at = utcnow() - timedelta(minutes=1)
    db.commit()

    response = client.post(
        "/api/auth/reset-password",
        json={"token": "stale-token", "new_password": "whatever123"}
    )
    assert response.status_code == 400


def test_email_is_case_insensitive(client, db):
    response = signup(client, email="Dup@Example.com")
    assert response.status_code == 201
    assert response.json()["email"] == "dup@example.com"

    assert signup(client, email="DUP@example.com").status_code == 400
    assert db.query(User).count() == 1

    response = client.post(
        "/api/auth/login",
        json={"email": "DUP@EXAMPLE.COM", "password": "testpassword123"}
    )
    assert response.status_code == 200


def test_signup_race_on_unique_email(db, create_user, monkeypatch):
    """Two registrations passing the existence check at once: the unique index decides."""
    create_user("race@example.com")
    original_first = Query.first

    def first_sees_no_user(query):
        if query.column_descriptions[0]["entity"] is User:
            return None
        return original_first(query)

    monkeypatch.setattr(Query, "first", first_sees_no_user)
    with pytest.raises(InvalidInputError):
        user_service.create_user(db, "Race@Example.com", "otherpassword")
    monkeypatch.undo()

    assert db.query(User).filter(User.email == "race@example.com").count() == 1


def test_login_purges_expired_tokens(client, db, create_user, login):
    user = create_user("purge@example.com")
    expired = create_access_token({"sub": user.email, "user_id": user.id}, expires_delta=timedelta(seconds=-1))
    db.add(UserToken(user_id=user.id, token=expired, expires_at=utcnow() - timedelta(seconds=1)))
    db.commit()

    login("purge@example.com")

    tokens = db.query(UserToken).filter(UserToken.user_id == user.id).all()
    assert len(tokens) == 1
    assert tokens[0].token != expired
    assert tokens[0].expires_at is not None
