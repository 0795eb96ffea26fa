"""Server-side login sessions carried by a signed cookie."""
from datetime import datetime, timedelta
import hashlib
import uuid

import bcrypt
from fastapi import Request, Response
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.config import get_settings
from app.errors import AuthenticationMissing
from app.models.auth import AuthSession
from app.models.user import User

settings = get_settings()

SESSION_TOKEN_TYPE = "session"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(),
    ).decode("utf-8")


def hash_token_id(token_id: str) -> str:
    """Hash session token identifier before persisting."""
    return hashlib.sha256(token_id.encode("utf-8")).hexdigest()


def create_session_token(user_id: str, token_id: str, expires_at: datetime) -> str:
    """Sign the cookie value that points at a persisted session."""
    to_encode = {"sub": user_id, "jti": token_id, "exp": expires_at, "type": SESSION_TOKEN_TYPE}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def get_request_ip(request: Request) -> str | None:
    """Extract best-effort client IP for session metadata."""
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None


def create_session(db: Session, user: User, request: Request) -> tuple[AuthSession, str]:
    """Persist a session for ``user`` and return it with its cookie value."""
    token_id = str(uuid.uuid4())
    expires_at = utcnow() + timedelta(minutes=settings.session_expire_minutes)

    auth_session = AuthSession(
        user_id=user.id,
        token_hash=hash_token_id(token_id),
        expires_at=expires_at.isoformat(),
        user_agent=request.headers.get("user-agent"),
        ip_address=get_request_ip(request),
    )
    db.add(auth_session)
    db.flush()

    return auth_session, create_session_token(user.id, token_id, expires_at)


def resolve_session(db: Session, token: str | None) -> tuple[AuthSession, User]:
    """Authoritatively resolve a session cookie value.

    Absent, malformed, revoked and expired sessions all raise
    :class:`AuthenticationMissing`.
    """
    if not token:
        raise AuthenticationMissing("Missing session")

    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise AuthenticationMissing("Invalid or expired session") from exc

    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise AuthenticationMissing("Invalid token type")

    user_id: str | None = payload.get("sub")
    token_id: str | None = payload.get("jti")
    if user_id is None or token_id is None:
        raise AuthenticationMissing("Invalid session")

    auth_session = db.query(AuthSession).filter(
        AuthSession.user_id == user_id,
        AuthSession.token_hash == hash_token_id(token_id),
    ).first()
    if not auth_session or auth_session.revoked_at:
        raise AuthenticationMissing("Invalid session")

    try:
        expires_at = datetime.fromisoformat(auth_session.expires_at)
    except ValueError as exc:
        raise AuthenticationMissing("Invalid session") from exc

    now = utcnow()
    if expires_at <= now:
        raise AuthenticationMissing("Session expired")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthenticationMissing("User not found")

    auth_session.last_used_at = now.isoformat()
    db.commit()
    return auth_session, user


def revoke_session(auth_session: AuthSession) -> None:
    """Revoke a single session, e.g. on logout."""
    now = utcnow().isoformat()
    auth_session.revoked_at = now
    auth_session.last_used_at = now


def revoke_all_user_sessions(db: Session, user_id: str) -> None:
    """Revoke all active sessions for a user."""
    now = utcnow().isoformat()
    db.query(AuthSession).filter(
        AuthSession.user_id == user_id,
        AuthSession.revoked_at.is_(None),
    ).update(
        {"revoked_at": now, "last_used_at": now},
        synchronize_session=False,
    )


def set_session_cookie(response: Response, token: str) -> None:
    """Issue secure HttpOnly session cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path=settings.session_cookie_path,
        max_age=settings.session_expire_minutes * 60,
    )


def clear_session_cookie(response: Response) -> None:
    """Clear session cookie."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path=settings.session_cookie_path,
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite=settings.session_cookie_samesite,
    )
