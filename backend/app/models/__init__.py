"""SQLAlchemy models package."""
from app.models.user import Role, User
from app.models.auth import AuthSession
from app.models.policy import Claim, Commission, Policy
from app.models.lead import Document, Lead
from app.models.notification import Notification

__all__ = [
    "Role",
    "User",
    "AuthSession",
    "Policy",
    "Claim",
    "Commission",
    "Lead",
    "Document",
    "Notification",
]
