from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class UserOut(BaseModel):
    id: str
    username: str | None
    email: str | None
    fullName: str
    isActive: bool
    lockoutEnd: datetime | None
    accessFailedCount: int
