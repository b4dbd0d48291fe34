from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin_user
from app.core.datetime_utils import as_utc
from app.models.user import BankUser
from app.schemas.user import UserOut
from app.services.models import UserDetailsServiceModel
from app.services.user import UserService

router = APIRouter(prefix="/config/users", tags=["config"])


def _to_out(row: UserDetailsServiceModel) -> UserOut:
    return UserOut(
        id=row.id,
        username=row.user_name,
        email=row.email,
        fullName=row.full_name,
        isActive=row.is_active,
        lockoutEnd=as_utc(row.lockout_end) if row.lockout_end is not None else None,
        accessFailedCount=row.access_failed_count,
    )


@router.get("", response_model=list[UserOut])
def list_users(
    db: Session = Depends(get_db),
    _: BankUser = Depends(require_admin_user),
) -> list[UserOut]:
    return [_to_out(r) for r in UserService(db).list_users()]


@router.post("/{user_id}/unlock", response_model=UserOut)
def unlock_user(
    user_id: str,
    db: Session = Depends(get_db),
    _: BankUser = Depends(require_admin_user),
) -> UserOut:
    service = UserService(db)
    if not service.unlock(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return _to_out(service.get_by_id(user_id))
