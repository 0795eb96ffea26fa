"""Policy, claim and commission models."""
import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from app.clock import utcnow_iso
from app.database import Base


class Policy(Base):
    """Insurance policy sold through the agency."""

    __tablename__ = "policies"
    __table_args__ = (
        Index("ix_policies_status_expiry", "status", "expiry_date"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    policy_number = Column(String(50), unique=True, nullable=False, index=True)
    client_name = Column(String(255), nullable=False)
    client_phone = Column(String(50))
    insurer = Column(String(100), nullable=False)
    vehicle_registration_number = Column(String(50))
    type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="active")
    premium = Column(Float, nullable=False)
    sum_insured = Column(Float, nullable=False)

    # Naive UTC
    start_date = Column(DateTime, nullable=False)
    expiry_date = Column(DateTime, nullable=False)

    created_at = Column(String(26), default=utcnow_iso)

    # Relationships
    claims = relationship("Claim", back_populates="policy", passive_deletes="all")
    commissions = relationship("Commission", back_populates="policy", passive_deletes=True)
    notifications = relationship("Notification", back_populates="policy", passive_deletes=True)


class Claim(Base):
    """Claim filed against a policy. Blocks deletion of its policy."""

    __tablename__ = "claims"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    policy_id = Column(String(36), ForeignKey("policies.id", ondelete="RESTRICT"), nullable=False, index=True)
    incident_date = Column(DateTime, nullable=False)
    type = Column(String(20), nullable=False)
    estimated_loss = Column(Float, nullable=False, default=0.0)
    description = Column(Text)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(String(26), default=utcnow_iso)

    policy = relationship("Policy", back_populates="claims")


class Commission(Base):
    """Commission earned on a policy."""

    __tablename__ = "commissions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    policy_id = Column(String(36), ForeignKey("policies.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    commission_date = Column(DateTime, nullable=False)
    created_at = Column(String(26), default=utcnow_iso)

    policy = relationship("Policy", back_populates="commissions")
