"""
Create expiry alerts for policies expiring within the configured window.
Run from cron: python -m scripts.send_policy_notifications  (from backend/)
"""
import logging
import sys

from app.database import Base, engine, get_db_context
from app import models  # noqa: F401
from app.services.notifications import create_policy_expiry_notifications


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    Base.metadata.create_all(bind=engine)

    with get_db_context() as db:
        result = create_policy_expiry_notifications(db)

    print(result.summary())
    for error in result.errors:
        print(f"  failed: {error}")
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
