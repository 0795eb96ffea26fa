"""Notification schemas."""
from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: str
    policy_id: str | None
    type: str
    title: str
    message: str
    read: bool
    created_at: str


class NotificationFeed(BaseModel):
    """Notification list page. ``unread_count`` is taken before marking read."""

    unread_count: int
    notifications: list[NotificationResponse]


class UnreadCount(BaseModel):
    count: int
