"""Shared FastAPI dependencies: database session and the per-handler auth guard."""
import logging

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.errors import AuthorizationDenied
from app.models.auth import AuthSession
from app.models.user import User
from app.schemas.common import ActionResult
from app.services.sessions import resolve_session

logger = logging.getLogger(__name__)
settings = get_settings()

__all__ = [
    "get_db",
    "get_current_session",
    "get_current_user",
    "require_admin",
    "admin_only_action",
]


def get_current_session(
    request: Request,
    db: Session = Depends(get_db),
) -> tuple[AuthSession, User]:
    """Resolve the request's session against the store.

    Runs independently of the cookie pre-filter in the middleware.
    """
    token = request.cookies.get(settings.session_cookie_name)
    return resolve_session(db, token)


def get_current_user(
    session_and_user: tuple[AuthSession, User] = Depends(get_current_session),
) -> User:
    _, user = session_and_user
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Admin-only pages."""
    if not current_user.is_admin:
        logger.info("Denied admin page to user %s", current_user.id)
        raise AuthorizationDenied()
    return current_user


def admin_only_action(current_user: User, action: str) -> JSONResponse | None:
    """Rejection response for a mutation the user's role does not allow.

    Returns ``None`` when the user is an admin and the action may proceed.
    """
    if current_user.is_admin:
        return None
    logger.info("Blocked %s for non-admin user %s", action, current_user.id)
    result = ActionResult(success=False, message=f"Only admins can {action}.")
    return JSONResponse(status_code=403, content=result.model_dump())
