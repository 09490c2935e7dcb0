from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from trade_journal import models
from trade_journal.config import Settings
from schemas import token as token_schema
from crud import crud_user
from .db import get_db  # Import get_db from within deps


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# --- Token Creation ---
def create_access_token(
    data: dict, settings: Settings, expires_delta: Optional[timedelta] = None
) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user: models.User, settings: Settings) -> str:
    # RFC 7519 requires 'sub' to be a string
    return create_access_token({"sub": str(user.id), "email": user.email}, settings)


def decode_access_token(token: str, settings: Settings) -> token_schema.TokenData:
    """Raises ``JWTError`` for bad signatures, expired tokens or a missing subject."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    subject = payload.get("sub")
    if subject is None:
        raise JWTError("Token has no subject")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise JWTError("Token subject is not a user id")
    return token_schema.TokenData(user_id=user_id, email=payload.get("email"))


# --- Current User Dependency ---
def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> models.User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        token_data = decode_access_token(token, settings)
    except JWTError:
        raise credentials_exception

    user = crud_user.user.get_user(db, user_id=token_data.user_id)
    if user is None:
        raise credentials_exception
    return user
