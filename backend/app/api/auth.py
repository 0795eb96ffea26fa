"""Authentication API endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_session, get_db
from app.models.auth import AuthSession
from app.models.user import Role, User
from app.schemas.auth import (
    MessageResponse,
    SessionResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from app.services.sessions import (
    clear_session_cookie,
    create_session,
    get_password_hash,
    revoke_session,
    set_session_cookie,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

SIGNUP_DISABLED = (
    "Creating an account is currently disabled. "
    "Please contact admin or site administrator for assistance."
)


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(user_data: UserSignup, db: Session = Depends(get_db)):
    """Create the first administrator. Closed once any admin exists."""
    if db.query(User).filter(User.role == Role.ADMIN.value).count() > 0:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=SIGNUP_DISABLED,
        )

    if db.query(User).filter(User.email == user_data.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = User(
        name=user_data.name,
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
        role=Role.ADMIN.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Bootstrapped administrator %s", user.id)

    return user


@router.post("/login", response_model=UserResponse)
def login(
    user_data: UserLogin,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """Login and receive the session cookie."""
    user = db.query(User).filter(User.email == user_data.email).first()

    if not user or not verify_password(user_data.password, user.password_hash):
        logger.info("Failed login for %s", user_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    _, token = create_session(db, user, request)
    db.commit()
    set_session_cookie(response, token)

    return user


@router.get("/session", response_model=SessionResponse)
def read_session(session_and_user: tuple[AuthSession, User] = Depends(get_current_session)):
    """Return the user behind the current session."""
    auth_session, user = session_and_user
    return SessionResponse(
        user=UserResponse.model_validate(user),
        expires_at=auth_session.expires_at,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    db: Session = Depends(get_db),
    session_and_user: tuple[AuthSession, User] = Depends(get_current_session),
):
    """Revoke the current session and clear its cookie."""
    auth_session, _ = session_and_user
    revoke_session(auth_session)
    db.commit()
    clear_session_cookie(response)
    return MessageResponse(message="Successfully logged out")
