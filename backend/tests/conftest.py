import os
import sys

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.clock import utcnow
from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.policy import Policy
from app.models.user import Role, User
from app.services.sessions import get_password_hash

PASSWORD = "TestPass123!"
COOKIE_NAME = "kevo_session"


def cookie_value(set_cookie_header: str, cookie_name: str = COOKIE_NAME) -> str:
    token_part = set_cookie_header.split(";", 1)[0]
    name, value = token_part.split("=", 1)
    assert name == cookie_name
    return value


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db):
    def _create_user(email: str, role: Role = Role.USER, name: str = "Test User") -> User:
        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(PASSWORD),
            role=role.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _create_user


@pytest.fixture
def login_as(client, create_user):
    """Create a user, log in and return the Cookie header for their session."""

    def _login_as(email: str, role: Role = Role.USER) -> dict[str, str]:
        create_user(email, role=role)
        response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200
        token = cookie_value(response.headers["set-cookie"])
        return {"Cookie": f"{COOKIE_NAME}={token}"}

    return _login_as


@pytest.fixture
def create_policy(db):
    counter = {"n": 0}

    def _create_policy(
        expires_in_days: float | None = None,
        status: str = "active",
        policy_number: str | None = None,
        expiry_date=None,
        now=None,
    ) -> Policy:
        counter["n"] += 1
        now = now or utcnow()
        if expiry_date is None:
            expiry_date = now + timedelta(days=expires_in_days)
        policy = Policy(
            policy_number=policy_number or f"POL-{counter['n']:04d}",
            client_name="Jane Client",
            insurer="Acme Insurance",
            type="motor",
            status=status,
            premium=1200.0,
            sum_insured=50000.0,
            start_date=expiry_date - timedelta(days=365),
            expiry_date=expiry_date,
        )
        db.add(policy)
        db.commit()
        db.refresh(policy)
        return policy

    return _create_policy
