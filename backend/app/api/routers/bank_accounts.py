from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.datetime_utils import as_utc
from app.models.user import BankUser
from app.schemas.bank_account import BankAccountCreate, BankAccountOut, BankAccountUpdate
from app.services.bank_account import BankAccountService
from app.services.models import BankAccountCreateServiceModel, BankAccountDetailsServiceModel

router = APIRouter(prefix="/bank-accounts", tags=["accounts"])


def _to_out(row: BankAccountDetailsServiceModel) -> BankAccountOut:
    return BankAccountOut(
        id=row.id,
        name=row.name,
        uniqueId=row.unique_id,
        balance=row.balance,
        createdOn=as_utc(row.created_on),
    )


def _get_owned_account(
    service: BankAccountService, account_id: str, current_user: BankUser
) -> BankAccountDetailsServiceModel:
    row = service.get_by_id(account_id)
    if not row or row.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Bank account not found")
    return row


@router.get("", response_model=list[BankAccountOut])
def list_bank_accounts(
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> list[BankAccountOut]:
    rows = BankAccountService(db).get_all_accounts_by_user_id(current_user.id)
    return [_to_out(r) for r in rows]


@router.post("", response_model=BankAccountOut)
def create_bank_account(
    payload: BankAccountCreate,
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> BankAccountOut:
    service = BankAccountService(db)
    account_id = service.create(BankAccountCreateServiceModel(name=payload.name, user_id=current_user.id))
    if not account_id:
        raise HTTPException(status_code=400, detail="Could not create bank account")

    return _to_out(service.get_by_id(account_id))


@router.get("/{account_id}", response_model=BankAccountOut)
def get_bank_account(
    account_id: str,
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> BankAccountOut:
    return _to_out(_get_owned_account(BankAccountService(db), account_id, current_user))


@router.patch("/{account_id}", response_model=BankAccountOut)
def rename_bank_account(
    account_id: str,
    payload: BankAccountUpdate,
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> BankAccountOut:
    service = BankAccountService(db)
    _get_owned_account(service, account_id, current_user)

    if not service.change_account_name(account_id, payload.name):
        raise HTTPException(status_code=400, detail="Invalid name")

    return _to_out(service.get_by_id(account_id))
