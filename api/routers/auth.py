from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from typing import Any
import logging

from api.deps import db as deps_db  # Renamed to avoid conflict
from api.deps import auth as deps_auth
from crud import crud_user
from schemas import user as user_schema
from schemas import token as token_schema
from trade_journal import models
from trade_journal.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=token_schema.AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    *,
    db: Session = Depends(deps_db.get_db),
    settings: Settings = Depends(deps_auth.get_settings),
    user_in: user_schema.UserCreate,
) -> Any:
    """
    Create a new user and log them in.
    """
    if crud_user.user.get_user_by_email(db, email=user_in.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        )

    user = crud_user.user.create_user(db=db, user_in=user_in)
    logger.info("Registered user %s", user.id)
    return {
        "access_token": deps_auth.create_user_token(user, settings),
        "token_type": "bearer",
        "user": user_schema.User.model_validate(user),
    }


@router.post("/login", response_model=token_schema.AuthResponse)
def login(
    db: Session = Depends(deps_db.get_db),
    settings: Settings = Depends(deps_auth.get_settings),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login; the form's ``username`` is the email address.
    """
    user = crud_user.user.authenticate(
        db, email=form_data.username, password=form_data.password
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = crud_user.user.mark_login(db, db_user=user)
    return {
        "access_token": deps_auth.create_user_token(user, settings),
        "token_type": "bearer",
        "user": user_schema.User.model_validate(user),
    }


@router.get("/me", response_model=user_schema.User)
def read_users_me(
    current_user: models.User = Depends(deps_auth.get_current_user),
) -> Any:
    """
    Get current user.
    """
    return current_user
