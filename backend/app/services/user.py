from __future__ import annotations

import enum
import logging
from datetime import timedelta
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core import constants
from app.core.config import settings
from app.core.datetime_utils import utc_now
from app.core.security import hash_password, new_stamp, normalize_key, verify_password
from app.models.identity import Role
from app.models.user import BankUser
from app.services.models import UserDetailsServiceModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class SignInResult(str, enum.Enum):
    SUCCESS = "success"
    FAILED = "failed"
    LOCKED_OUT = "locked_out"


class UserService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_user_name(self, user_name: str | None) -> BankUser | None:
        normalized = normalize_key(user_name)
        if not normalized:
            return None
        return self.db.scalar(select(BankUser).where(BankUser.normalized_user_name == normalized))

    def find_by_email(self, email: str | None) -> BankUser | None:
        normalized = normalize_key(email)
        if not normalized:
            return None
        return self.db.scalar(select(BankUser).where(BankUser.normalized_email == normalized))

    def get_user_id_by_username(self, user_name: str | None) -> str | None:
        user = self.find_by_user_name(user_name)
        return user.id if user else None

    def get_account_owner_full_name(self, user_id: str | None) -> str | None:
        if not user_id:
            return None
        return self.db.scalar(select(BankUser.full_name).where(BankUser.id == user_id))

    def get_by_id(self, user_id: str | None, model_cls: type[T] = UserDetailsServiceModel) -> T | None:
        if not user_id:
            return None
        row = self.db.get(BankUser, user_id)
        return model_cls.model_validate(row) if row else None

    def list_users(self, model_cls: type[T] = UserDetailsServiceModel) -> list[T]:
        rows = self.db.scalars(select(BankUser).order_by(BankUser.full_name)).all()
        return [model_cls.model_validate(r) for r in rows]

    def register(self, *, user_name: str, email: str | None, password: str, full_name: str) -> BankUser | None:
        full_name = (full_name or "").strip()
        if not full_name or len(full_name) > constants.User.FULL_NAME_MAX_LENGTH:
            return None
        if not user_name or not user_name.strip():
            return None
        if self.find_by_user_name(user_name) or (email and self.find_by_email(email)):
            return None

        user = BankUser(
            user_name=user_name.strip(),
            normalized_user_name=normalize_key(user_name),
            email=email,
            normalized_email=normalize_key(email),
            password_hash=hash_password(password),
            security_stamp=new_stamp(),
            concurrency_stamp=new_stamp(),
            full_name=full_name,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    def authenticate(self, user_name: str, password: str) -> tuple[SignInResult, BankUser | None]:
        user = self.find_by_user_name(user_name)
        if not user or not user.is_active:
            return SignInResult.FAILED, None

        now = utc_now()
        if self.is_locked_out(user):
            return SignInResult.LOCKED_OUT, user

        if not verify_password(password, user.password_hash):
            user.access_failed_count = (user.access_failed_count or 0) + 1
            locked = False
            if user.lockout_enabled and user.access_failed_count >= settings.lockout_max_failed_attempts:
                user.lockout_end = now + timedelta(minutes=settings.lockout_minutes)
                user.access_failed_count = 0
                locked = True
                logger.warning("User locked out", extra={"user_id": user.id})
            self.db.add(user)
            self.db.commit()
            return (SignInResult.LOCKED_OUT if locked else SignInResult.FAILED), user

        if user.access_failed_count or user.lockout_end is not None:
            user.access_failed_count = 0
            user.lockout_end = None
            self.db.add(user)
            self.db.commit()
        return SignInResult.SUCCESS, user

    @staticmethod
    def is_locked_out(user: BankUser) -> bool:
        return bool(user.lockout_enabled and user.lockout_end is not None and user.lockout_end > utc_now())

    def unlock(self, user_id: str) -> bool:
        user = self.db.get(BankUser, user_id)
        if not user:
            return False
        user.lockout_end = None
        user.access_failed_count = 0
        user.concurrency_stamp = new_stamp()
        self.db.add(user)
        self.db.commit()
        return True

    def rotate_security_stamp(self, user: BankUser) -> None:
        user.security_stamp = new_stamp()
        user.concurrency_stamp = new_stamp()
        self.db.add(user)
        self.db.commit()
        logger.info("Security stamp rotated", extra={"user_id": user.id})

    def add_to_role(self, user: BankUser, role_name: str) -> None:
        normalized = normalize_key(role_name)
        role = self.db.scalar(select(Role).where(Role.normalized_name == normalized))
        if role is None:
            role = Role(name=role_name, normalized_name=normalized)
            self.db.add(role)
        if role not in user.roles:
            user.roles.append(role)
        self.db.commit()
