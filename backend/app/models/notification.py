"""Notification model for policy alerts."""
import uuid

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.clock import utcnow_iso
from app.database import Base

POLICY_EXPIRY = "policy_expiry"


class Notification(Base):
    """Back-office alert, optionally tied to a policy."""

    __tablename__ = "notifications"
    __table_args__ = (
        # At most one alert of each type per policy, so overlapping job runs
        # cannot both insert an expiry alert.
        UniqueConstraint("policy_id", "type", name="uq_notification_policy_type"),
        Index("ix_notifications_read", "read"),
        Index("ix_notifications_created", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    policy_id = Column(String(36), ForeignKey("policies.id", ondelete="CASCADE"))

    # Notification type: policy_expiry, system
    type = Column(String(50), nullable=False, default=POLICY_EXPIRY)

    # Content
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)

    # Status
    read = Column(Integer, default=0, nullable=False)  # SQLite boolean
    read_at = Column(String(26))

    # Timestamps
    created_at = Column(String(26), default=utcnow_iso)

    policy = relationship("Policy", back_populates="notifications")
