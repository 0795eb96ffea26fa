"""Lead and document schemas."""
from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class LeadCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., min_length=1, max_length=50)
    email: EmailStr | None = None
    status: Literal["new", "converted", "lost"] = "new"
    priority: Literal["low", "high"] = "low"
    source: Literal["referral", "call", "social_media"]
    notes: str | None = None


class LeadResponse(BaseModel):
    id: str
    full_name: str
    phone_number: str
    email: str | None
    status: str
    priority: str
    source: str
    notes: str | None
    created_at: str

    class Config:
        from_attributes = True


class DocumentResponse(BaseModel):
    id: str
    client_name: str
    name: str
    type: str
    url: str
    size_bytes: int | None
    created_at: str

    class Config:
        from_attributes = True
