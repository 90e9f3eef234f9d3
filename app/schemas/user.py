import re
from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")

class UserBase(CamelModel):
    """Base user schema with common fields."""
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)

class UserCreate(UserBase):
    """Schema for registering a new user, includes password."""
    password: str

    @field_validator("password")
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        if not PASSWORD_PATTERN.match(v):
            raise ValueError("Password must contain an uppercase letter, a lowercase letter and a digit.")
        return v

    @field_validator("name")
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

class User(UserBase):
    """Main user schema for reading user data."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
