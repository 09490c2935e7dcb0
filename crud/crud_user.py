from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from passlib.context import CryptContext  # For password hashing
from typing import Optional

from trade_journal import models
from schemas import user as user_schema  # Alias to avoid naming conflict

# Password hashing setup
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CRUDUser:
    def get_user(self, db: Session, user_id: int) -> Optional[models.User]:
        return db.query(models.User).filter(models.User.id == user_id).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[models.User]:
        return (
            db.query(models.User)
            .filter(models.User.email == normalize_email(email))
            .first()
        )

    def create_user(
        self, db: Session, *, user_in: user_schema.UserCreate
    ) -> models.User:
        db_user = models.User(
            email=normalize_email(user_in.email),
            hashed_password=get_password_hash(user_in.password),
            full_name=user_in.full_name,
            timezone=user_in.timezone or "UTC",
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        return db_user

    def mark_login(self, db: Session, *, db_user: models.User) -> models.User:
        db_user.last_login_at = func.now()
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        return db_user

    def authenticate(
        self, db: Session, *, email: str, password: str
    ) -> Optional[models.User]:
        user = self.get_user_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user


user = CRUDUser()
