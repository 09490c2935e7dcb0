from pydantic import BaseModel, EmailStr, Field
from typing import Optional
import datetime

# --- Base Schemas ---


class UserBase(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)
    timezone: Optional[str] = None  # Stored as "UTC" when omitted


# --- Properties to return to client (filters out sensitive data like hashed_password) ---
class User(UserBase):
    id: int
    timezone: str
    created_at: datetime.datetime
    last_login_at: Optional[datetime.datetime] = None

    class Config:
        from_attributes = True
