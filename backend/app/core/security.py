from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def normalize_key(value: str | None) -> str | None:
    """Upper-invariant form used for the unique user name / e-mail lookups."""

    if value is None:
        return None
    return value.strip().upper()


def new_stamp() -> str:
    return str(uuid.uuid4())


def create_access_token(subject: str, security_stamp: str | None = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.jwt_expire_minutes)
    to_encode = {"sub": subject, "exp": expire}
    if security_stamp:
        to_encode["stamp"] = security_stamp
    return jwt.encode(to_encode, settings.jwt_secret, algorithm="HS256")


def decode_access_token(token: str) -> tuple[str, str | None]:
    payload = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
    sub = payload.get("sub")
    if not sub:
        raise ValueError("Missing sub")
    return str(sub), payload.get("stamp")
