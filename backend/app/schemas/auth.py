"""Authentication schemas."""
from pydantic import BaseModel, EmailStr, Field

from app.models.user import Role


class UserSignup(BaseModel):
    """First administrator registration request."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=4)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """User info response."""

    id: str
    name: str
    email: str
    role: Role
    created_at: str

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    """Resolved session info."""

    user: UserResponse
    expires_at: str


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
