import pytest

from app.clock import utcnow
from app.middleware import is_protected_path
from app.models.policy import Commission, Policy
from app.models.user import Role, User
from conftest import COOKIE_NAME

PROTECTED = ["/dashboard", "/policies", "/claims", "/documents", "/commissions", "/leads", "/users"]


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/dashboard", True),
        ("/policies/123", True),
        ("/users/abc/password", True),
        ("/policies-archive", False),
        ("/", False),
        ("/notifications", False),
        ("/api/auth/login", False),
    ],
)
def test_is_protected_path(path, expected):
    assert is_protected_path(path, PROTECTED) is expected


@pytest.mark.parametrize("path", PROTECTED + ["/policies/some-id"])
def test_missing_cookie_redirects_to_root(client, path):
    response = client.get(path, follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/"
    assert response.content == b""


def test_valid_session_passes_gate(client, login_as):
    headers = login_as("agent@example.com")

    response = client.get("/dashboard", headers=headers, follow_redirects=False)

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "agent@example.com"
    assert response.json()["is_admin"] is False


def test_unresolvable_cookie_gets_access_denied_view(client):
    response = client.get(
        "/dashboard",
        headers={"Cookie": f"{COOKIE_NAME}=not-a-session"},
        follow_redirects=False,
    )

    assert response.status_code == 401
    assert "text/html" in response.headers["content-type"]
    assert "Access Denied" in response.text


def test_public_paths_are_not_gated(client):
    assert client.get("/", follow_redirects=False).status_code == 200
    assert client.get("/health", follow_redirects=False).status_code == 200


@pytest.mark.parametrize("path", ["/commissions", "/users"])
def test_user_role_is_denied_admin_pages(client, login_as, path):
    headers = login_as("user@example.com", role=Role.USER)

    response = client.get(path, headers=headers)

    assert response.status_code == 401
    assert "Access Denied" in response.text


@pytest.mark.parametrize("path", ["/commissions", "/users"])
def test_admin_role_reaches_admin_pages(client, login_as, path):
    headers = login_as("admin@example.com", role=Role.ADMIN)

    response = client.get(path, headers=headers)

    assert response.status_code == 200
    assert isinstance(response.json(), list)


def test_user_cannot_delete_policy(client, login_as, create_policy, db):
    headers = login_as("user@example.com", role=Role.USER)
    policy = create_policy(expires_in_days=30)

    response = client.delete(f"/policies/{policy.id}", headers=headers)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "message": "Only admins can delete policies.",
        "id": None,
    }
    assert db.query(Policy).filter(Policy.id == policy.id).count() == 1


def test_user_cannot_manage_commissions(client, login_as, create_policy, db):
    headers = login_as("user@example.com", role=Role.USER)
    policy = create_policy(expires_in_days=30)

    response = client.post(
        "/commissions",
        headers=headers,
        json={"policy_id": policy.id, "amount": 150.0, "commission_date": "2026-01-01T00:00:00"},
    )

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "message": "Only admins can manage commissions.",
        "id": None,
    }
    assert db.query(Commission).count() == 0


def test_admin_can_change_user_role(client, login_as, create_user):
    headers = login_as("admin@example.com", role=Role.ADMIN)
    target = create_user("clerk@example.com")

    response = client.patch(
        f"/users/{target.id}",
        headers=headers,
        json={"name": "Clerk", "role": "admin"},
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    bad_role = client.patch(
        f"/users/{target.id}",
        headers=headers,
        json={"name": "Clerk", "role": "superuser"},
    )
    assert bad_role.status_code == 422


def test_user_cannot_delete_commission(client, login_as, create_policy, db):
    headers = login_as("user@example.com", role=Role.USER)
    policy = create_policy(expires_in_days=30)
    commission = Commission(policy_id=policy.id, amount=80.0, commission_date=utcnow())
    db.add(commission)
    db.commit()

    response = client.delete(f"/commissions/{commission.id}", headers=headers)

    assert response.status_code == 403
    assert "application/json" in response.headers["content-type"]
    assert response.json()["message"] == "Only admins can manage commissions."
    assert db.query(Commission).count() == 1


@pytest.mark.parametrize(
    ("method", "path_suffix", "payload"),
    [
        ("post", "", {"name": "New", "email": "new@example.com", "password": "secret", "role": "admin"}),
        ("patch", "/{id}", {"name": "Promoted", "role": "admin"}),
        ("put", "/{id}/password", {"new_password": "hijacked"}),
        ("delete", "/{id}", None),
    ],
)
def test_user_cannot_manage_users(client, login_as, create_user, db, method, path_suffix, payload):
    headers = login_as("user@example.com", role=Role.USER)
    target = create_user("colleague@example.com")
    path = "/users" + path_suffix.format(id=target.id)

    kwargs = {"headers": headers}
    if payload is not None:
        kwargs["json"] = payload
    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "message": "Only admins can manage users.",
        "id": None,
    }
    db.expire_all()
    assert db.query(User).count() == 2
    assert db.query(User).filter(User.id == target.id).one().role == Role.USER.value


def test_last_admin_cannot_be_demoted(client, login_as, db):
    headers = login_as("admin@example.com", role=Role.ADMIN)
    admin = db.query(User).filter(User.email == "admin@example.com").one()

    response = client.patch(
        f"/users/{admin.id}",
        headers=headers,
        json={"name": "Admin", "role": "user"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["message"] == "At least one admin must remain"
    db.expire_all()
    assert db.query(User).filter(User.id == admin.id).one().role == Role.ADMIN.value

    signup = client.post(
        "/api/auth/signup",
        json={"name": "Intruder", "email": "intruder@example.com", "password": "secret"},
    )
    assert signup.status_code == 403


def test_admin_can_be_demoted_while_another_remains(client, login_as, create_user):
    headers = login_as("admin@example.com", role=Role.ADMIN)
    other = create_user("second-admin@example.com", role=Role.ADMIN)

    response = client.patch(
        f"/users/{other.id}",
        headers=headers,
        json={"name": "Second", "role": "user"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
