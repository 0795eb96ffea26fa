"""User model."""
import enum
import uuid

from sqlalchemy import CheckConstraint, Column, String
from sqlalchemy.orm import relationship

from app.clock import utcnow_iso
from app.database import Base


class Role(str, enum.Enum):
    """Authorization level of a user. No other values are recognized."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Back-office user account."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(10), nullable=False, default=Role.USER.value)
    created_at = Column(String(26), default=utcnow_iso)
    updated_at = Column(String(26), default=utcnow_iso, onupdate=utcnow_iso)

    # Relationships
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
