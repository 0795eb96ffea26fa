"""Lead and client document models."""
import uuid

from sqlalchemy import Column, Integer, String, Text

from app.clock import utcnow_iso
from app.database import Base


class Lead(Base):
    """Prospective client."""

    __tablename__ = "leads"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String(255), nullable=False)
    phone_number = Column(String(50), nullable=False)
    email = Column(String(255))
    status = Column(String(20), nullable=False, default="new")
    priority = Column(String(10), nullable=False, default="low")
    source = Column(String(20), nullable=False)
    notes = Column(Text)
    created_at = Column(String(26), default=utcnow_iso, index=True)


class Document(Base):
    """Metadata for a client document stored in external file storage."""

    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    client_name = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)
    url = Column(String(1024), nullable=False)
    size_bytes = Column(Integer, default=0)
    created_at = Column(String(26), default=utcnow_iso)
