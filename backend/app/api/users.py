"""User management (admin only)."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import admin_only_action, get_current_user, get_db, require_admin
from app.api.results import action_error
from app.errors import DependencyConflict, RecordNotFound
from app.models.user import Role, User
from app.schemas.auth import UserResponse
from app.schemas.common import ActionResult
from app.schemas.user import PasswordChange, UserCreate, UserUpdate
from app.services.records import delete_record
from app.services.sessions import get_password_hash, revoke_all_user_sessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

LAST_ADMIN = "At least one admin must remain"


def _get_user_or_none(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ActionResult(success=False, message=message).model_dump(),
    )


@router.get("", response_model=list[UserResponse])
def get_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """User management page."""
    return db.query(User).order_by(User.created_at.asc()).all()


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rejected = admin_only_action(current_user, "manage users")
    if rejected:
        return rejected

    if db.query(User).filter(User.email == user_data.email).first():
        return _bad_request("Email already registered")

    user = User(
        name=user_data.name,
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
        role=user_data.role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Admin %s created user %s (%s)", current_user.id, user.id, user.role)

    return ActionResult(success=True, message="User created", id=user.id)


@router.patch("/{user_id}", response_model=ActionResult)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Rename a user or change their role.

    Demoting the only remaining admin is refused: with no admin left the
    bootstrap signup would reopen.
    """
    rejected = admin_only_action(current_user, "manage users")
    if rejected:
        return rejected

    user = _get_user_or_none(db, user_id)
    if not user:
        return action_error(RecordNotFound("User not found"))

    if user.is_admin and user_data.role != Role.ADMIN:
        admins = db.query(User).filter(User.role == Role.ADMIN.value).count()
        if admins <= 1:
            logger.warning("Refused to demote last admin %s", user.id)
            return _bad_request(LAST_ADMIN)

    user.name = user_data.name
    user.role = user_data.role.value
    db.commit()
    logger.info("Admin %s set role of user %s to %s", current_user.id, user.id, user.role)

    return ActionResult(success=True, message="User updated", id=user.id)


@router.put("/{user_id}/password", response_model=ActionResult)
def change_user_password(
    user_id: str,
    password_data: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Set a new password and sign the user out everywhere."""
    rejected = admin_only_action(current_user, "manage users")
    if rejected:
        return rejected

    user = _get_user_or_none(db, user_id)
    if not user:
        return action_error(RecordNotFound("User not found"))

    user.password_hash = get_password_hash(password_data.new_password)
    revoke_all_user_sessions(db, user.id)
    db.commit()

    return ActionResult(success=True, message="Password changed", id=user.id)


@router.delete("/{user_id}", response_model=ActionResult)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rejected = admin_only_action(current_user, "manage users")
    if rejected:
        return rejected

    if user_id == current_user.id:
        return _bad_request("You cannot delete your own account")

    try:
        delete_record(db, User, user_id, "user")
    except (DependencyConflict, RecordNotFound) as exc:
        return action_error(exc)

    return ActionResult(success=True, message="User deleted")
