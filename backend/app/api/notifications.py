"""Notification feed, unread badge and the expiry alert trigger."""
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.config import get_settings
from app.models.user import User
from app.schemas.notification import NotificationFeed, NotificationResponse, UnreadCount
from app.services.notifications import (
    count_unread,
    create_policy_expiry_notifications,
    list_notifications,
    mark_all_read,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(tags=["notifications"])
page_router = APIRouter(prefix="/notifications", tags=["notifications"])


@page_router.get("", response_model=NotificationFeed)
def get_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Notification list. Viewing it marks every notification read."""
    notifications = [
        NotificationResponse(
            id=n.id,
            policy_id=n.policy_id,
            type=n.type,
            title=n.title,
            message=n.message,
            read=bool(n.read),
            created_at=n.created_at,
        )
        for n in list_notifications(db)
    ]
    unread_count = sum(1 for n in notifications if not n.read)

    marked = mark_all_read(db)
    logger.debug("User %s viewed notifications, marked %d read", current_user.id, marked)

    return NotificationFeed(unread_count=unread_count, notifications=notifications)


@router.get("/notifications/unread-count", response_model=UnreadCount)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Unread badge for the header."""
    return UnreadCount(count=count_unread(db))


def verify_cron_secret(authorization: str | None = Header(default=None)) -> None:
    """Require ``Bearer <CRON_SECRET>`` when a cron secret is configured."""
    if not settings.cron_secret:
        return
    if authorization != f"Bearer {settings.cron_secret}":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid cron secret",
        )


@router.get(
    "/send-policy-notifications",
    response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_cron_secret)],
)
def send_policy_notifications(db: Session = Depends(get_db)):
    """Create expiry alerts for policies expiring soon. Called by a scheduler."""
    result = create_policy_expiry_notifications(db)
    if result.failed:
        logger.warning("Expiry alert run had %d failures: %s", result.failed, result.errors)
    return PlainTextResponse(result.summary(), status_code=status.HTTP_201_CREATED)
