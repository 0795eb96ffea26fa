"""Policy, claim and commission schemas."""
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

PolicyType = Literal["motor", "medical", "life", "property", "travel", "other"]
PolicyStatus = Literal["active", "pending", "cancelled"]
CommissionStatus = Literal["pending", "paid"]
ClaimStatus = Literal["pending", "approved", "paid", "rejected"]


def naive_utc(value: datetime) -> datetime:
    """Stored dates are naive UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class PolicyCreate(BaseModel):
    """New policy request."""

    policy_number: str = Field(..., min_length=1, max_length=50)
    client_name: str = Field(..., min_length=1, max_length=255)
    client_phone: str | None = None
    insurer: str = Field(..., min_length=1, max_length=100)
    vehicle_registration_number: str | None = None
    type: PolicyType
    status: PolicyStatus = "active"
    premium: float = Field(..., ge=0)
    sum_insured: float = Field(..., ge=0)
    start_date: datetime
    expiry_date: datetime

    @field_validator("start_date", "expiry_date")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        return naive_utc(value)

    @model_validator(mode="after")
    def check_dates(self):
        if self.expiry_date <= self.start_date:
            raise ValueError("expiry_date must be after start_date")
        return self


class PolicyResponse(BaseModel):
    id: str
    policy_number: str
    client_name: str
    client_phone: str | None
    insurer: str
    vehicle_registration_number: str | None
    type: str
    status: str
    premium: float
    sum_insured: float
    start_date: datetime
    expiry_date: datetime

    class Config:
        from_attributes = True


class ClaimCreate(BaseModel):
    """Claim filed against an existing policy. Also used for edits."""

    policy_id: str
    incident_date: datetime
    type: str = Field(..., min_length=1, max_length=20)
    estimated_loss: float = Field(..., ge=0)
    description: str | None = None
    status: ClaimStatus = "pending"

    @field_validator("incident_date")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        return naive_utc(value)


class ClaimResponse(BaseModel):
    id: str
    policy_id: str
    incident_date: datetime
    type: str
    estimated_loss: float
    description: str | None
    status: str

    class Config:
        from_attributes = True


class CommissionCreate(BaseModel):
    policy_id: str
    amount: float = Field(..., gt=0)
    status: CommissionStatus = "pending"
    commission_date: datetime


class CommissionResponse(BaseModel):
    id: str
    policy_id: str
    policy_number: str
    amount: float
    status: str
    commission_date: datetime
