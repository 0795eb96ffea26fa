"""Policy expiry alerts and notification read state."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.config import get_settings
from app.models.notification import POLICY_EXPIRY, Notification
from app.models.policy import Policy

logger = logging.getLogger(__name__)

EXPIRY_ALERT_TITLE = "Policy Expiry Alert"
NO_EXPIRING_POLICIES = "No expiring policies found"


@dataclass
class ExpiryJobResult:
    """Per-item outcome of one expiry notification run."""

    created: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)

    @property
    def found(self) -> int:
        return self.created + self.skipped + self.failed

    def summary(self) -> str:
        """Plain-text body returned by the trigger endpoint."""
        if self.found == 0:
            return NO_EXPIRING_POLICIES
        text = f"Created {self.created} notifications for expiring policies"
        if self.failed:
            text += f" ({self.failed} failed)"
        return text


def expiry_message(policy_number: str, expiry_date: datetime) -> str:
    return f"Policy #{policy_number} is expiring on {expiry_date.date().isoformat()}. Please renew it."


def find_expiring_policies(
    db: Session,
    now: datetime | None = None,
    window_days: int | None = None,
) -> list[Policy]:
    """Active policies expiring in ``[now, now + window)`` with no notifications yet."""
    now = now or utcnow()
    if window_days is None:
        window_days = get_settings().expiry_window_days
    horizon = now + timedelta(days=window_days)

    return (
        db.query(Policy)
        .filter(
            Policy.status == "active",
            Policy.expiry_date >= now,
            Policy.expiry_date < horizon,
            ~Policy.notifications.any(),
        )
        .order_by(Policy.expiry_date.asc())
        .all()
    )


def create_policy_expiry_notifications(
    db: Session,
    now: datetime | None = None,
    window_days: int | None = None,
) -> ExpiryJobResult:
    """Create one expiry alert per qualifying policy.

    Each insert is committed on its own so one failing policy does not take
    the rest of the batch down. A unique-constraint violation means another
    run already alerted that policy; it is counted as skipped.
    """
    now = now or utcnow()
    policies = find_expiring_policies(db, now=now, window_days=window_days)
    result = ExpiryJobResult()

    if not policies:
        logger.info("No expiring policies found")
        return result

    # Snapshot the fields we need; a rollback expires the ORM instances.
    targets = [(p.id, p.policy_number, p.expiry_date) for p in policies]

    for policy_id, policy_number, expiry_date in targets:
        notification = Notification(
            policy_id=policy_id,
            type=POLICY_EXPIRY,
            title=EXPIRY_ALERT_TITLE,
            message=expiry_message(policy_number, expiry_date),
            read=0,
            created_at=now.isoformat(),
        )
        try:
            db.add(notification)
            db.commit()
        except IntegrityError:
            db.rollback()
            result.skipped += 1
            logger.info("Policy %s already has an expiry alert, skipping", policy_number)
            continue
        except SQLAlchemyError as exc:
            db.rollback()
            result.failed += 1
            result.errors.append(f"{policy_number}: {exc}")
            logger.exception("Failed to create expiry alert for policy %s", policy_number)
            continue

        result.created += 1
        result.notifications.append(notification)

    logger.info(
        "Expiry alerts: created=%d skipped=%d failed=%d",
        result.created,
        result.skipped,
        result.failed,
    )
    return result


def count_unread(db: Session) -> int:
    return db.query(Notification).filter(Notification.read == 0).count()


def list_notifications(db: Session) -> list[Notification]:
    return db.query(Notification).order_by(Notification.created_at.desc()).all()


def mark_all_read(db: Session) -> int:
    """Mark every notification read. Returns the number of rows changed."""
    now = utcnow().isoformat()
    updated = (
        db.query(Notification)
        .filter(Notification.read == 0)
        .update({"read": 1, "read_at": now}, synchronize_session=False)
    )
    db.commit()
    return updated
