"""UTC time helpers.

Timestamps are stored naive in UTC: audit columns as ISO strings, business
dates (policy start/expiry) as ``DateTime``.
"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time without ``tzinfo``."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utcnow_iso() -> str:
    return utcnow().isoformat()
