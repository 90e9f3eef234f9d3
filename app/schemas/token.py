from pydantic import EmailStr, Field
from typing import Optional

from app.schemas.base import CamelModel
from app.schemas.user import User

class TokenPayload(CamelModel):
    user_id: int
    email: Optional[str] = None
    jti: Optional[str] = None
    exp: Optional[int] = None

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class AuthResponse(CamelModel):
    """Response for the register and login endpoints."""
    user: User
    token: str

class VerifyResponse(CamelModel):
    valid: bool
    user: User
