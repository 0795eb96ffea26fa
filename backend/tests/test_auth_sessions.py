from datetime import timedelta

from app.clock import utcnow
from app.models.auth import AuthSession
from app.models.user import Role, User
from conftest import COOKIE_NAME, PASSWORD, cookie_value


def test_signup_bootstraps_first_admin_then_closes(client, db):
    first = client.post(
        "/api/auth/signup",
        json={"name": "Owner", "email": "owner@example.com", "password": PASSWORD},
    )
    assert first.status_code == 201
    assert first.json()["role"] == "admin"

    second = client.post(
        "/api/auth/signup",
        json={"name": "Late", "email": "late@example.com", "password": PASSWORD},
    )
    assert second.status_code == 403
    assert "currently disabled" in second.json()["detail"]
    assert db.query(User).count() == 1


def test_login_sets_secure_httponly_session_cookie(client, create_user):
    create_user("alpha@example.com")

    response = client.post("/api/auth/login", json={"email": "alpha@example.com", "password": PASSWORD})
    set_cookie = response.headers.get("set-cookie", "")

    assert response.status_code == 200
    assert response.json()["role"] == "user"
    assert f"{COOKIE_NAME}=" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "Secure" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert "Path=/" in set_cookie


def test_login_rejects_wrong_password(client, create_user):
    create_user("beta@example.com")

    response = client.post("/api/auth/login", json={"email": "beta@example.com", "password": "nope"})

    assert response.status_code == 401
    assert "set-cookie" not in response.headers


def test_session_endpoint_resolves_user(client, login_as):
    headers = login_as("gamma@example.com", role=Role.ADMIN)

    response = client.get("/api/auth/session", headers=headers)

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "gamma@example.com"
    assert response.json()["user"]["role"] == "admin"


def test_logout_revokes_session(client, login_as, db):
    headers = login_as("delta@example.com")

    logout_response = client.post("/api/auth/logout", headers=headers)
    assert logout_response.status_code == 200

    after_logout = client.get("/api/auth/session", headers=headers)
    assert after_logout.status_code == 401

    active_sessions = db.query(AuthSession).filter(AuthSession.revoked_at.is_(None)).count()
    assert active_sessions == 0


def test_expired_session_is_treated_as_missing(client, login_as, db):
    headers = login_as("epsilon@example.com")
    db.query(AuthSession).update(
        {"expires_at": (utcnow() - timedelta(seconds=1)).isoformat()},
        synchronize_session=False,
    )
    db.commit()

    response = client.get("/api/auth/session", headers=headers)

    assert response.status_code == 401


def test_tampered_cookie_is_rejected(client, login_as):
    headers = login_as("zeta@example.com")
    token = cookie_value(headers["Cookie"])
    tampered = token[:-2] + ("AA" if not token.endswith("AA") else "BB")

    response = client.get("/api/auth/session", headers={"Cookie": f"{COOKIE_NAME}={tampered}"})

    assert response.status_code == 401
