"""User management schemas."""
from pydantic import BaseModel, EmailStr, Field

from app.models.user import Role


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=4)
    role: Role = Role.USER


class UserUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    role: Role


class PasswordChange(BaseModel):
    new_password: str = Field(..., min_length=4)
