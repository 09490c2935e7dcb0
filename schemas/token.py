from pydantic import BaseModel
from typing import Optional

from .user import User


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    """Token plus the authenticated user, returned by register and login."""

    user: User


class TokenData(BaseModel):
    user_id: Optional[int] = None
    email: Optional[str] = None
