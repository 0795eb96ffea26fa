"""Record removal shared by the back-office routes."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import Base
from app.errors import DependencyConflict, RecordNotFound

logger = logging.getLogger(__name__)


def delete_record(
    db: Session,
    model: type[Base],
    record_id: str,
    label: str,
    conflict_message: str | None = None,
) -> None:
    """Delete ``model`` row ``record_id``.

    A foreign-key violation on flush is turned into
    :class:`DependencyConflict` carrying ``conflict_message``.
    """
    record = db.query(model).filter(model.id == record_id).first()
    if not record:
        raise RecordNotFound(f"{label.capitalize()} not found")

    db.delete(record)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Refused to delete %s %s: %s", label, record_id, exc.orig)
        raise DependencyConflict(
            conflict_message or f"Could not delete {label}: other records still reference it."
        ) from exc

    logger.info("Deleted %s %s", label, record_id)
