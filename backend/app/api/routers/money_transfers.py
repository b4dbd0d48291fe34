from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db, get_email_sender
from app.core.datetime_utils import as_utc
from app.core.email import EmailSender
from app.models.user import BankUser
from app.schemas.money_transfer import MoneyTransferCreate, MoneyTransferCreated, MoneyTransferOut
from app.services.bank_account import BankAccountService
from app.services.models import MoneyTransferListingServiceModel
from app.services.money_transfer import MoneyTransferService

router = APIRouter(prefix="/money-transfers", tags=["transfers"])


def _service(db: Session = Depends(get_db), email_sender: EmailSender = Depends(get_email_sender)) -> MoneyTransferService:
    return MoneyTransferService(db, email_sender)


def _to_out(row: MoneyTransferListingServiceModel) -> MoneyTransferOut:
    return MoneyTransferOut(
        id=row.id,
        accountId=row.account_id,
        amount=row.amount,
        description=row.description,
        source=row.source,
        destination=row.destination,
        senderName=row.sender_name,
        recipientName=row.recipient_name,
        madeOn=as_utc(row.made_on),
        referenceNumber=row.reference_number,
    )


@router.get("", response_model=list[MoneyTransferOut])
def list_money_transfers(
    service: MoneyTransferService = Depends(_service),
    current_user: BankUser = Depends(get_current_user),
) -> list[MoneyTransferOut]:
    return [_to_out(r) for r in service.get_all_money_transfers(current_user.id)]


@router.get("/recent", response_model=list[MoneyTransferOut])
def list_recent_money_transfers(
    service: MoneyTransferService = Depends(_service),
    current_user: BankUser = Depends(get_current_user),
) -> list[MoneyTransferOut]:
    return [_to_out(r) for r in service.get_last_10_money_transfers_for_user(current_user.id)]


@router.get("/account/{account_id}", response_model=list[MoneyTransferOut])
def list_account_money_transfers(
    account_id: str,
    db: Session = Depends(get_db),
    service: MoneyTransferService = Depends(_service),
    current_user: BankUser = Depends(get_current_user),
) -> list[MoneyTransferOut]:
    account = BankAccountService(db).get_by_id(account_id)
    if not account or account.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Bank account not found")

    return [_to_out(r) for r in service.get_all_money_transfers_for_account(account_id)]


@router.get("/reference/{reference_number}", response_model=list[MoneyTransferOut])
def get_money_transfer_by_reference(
    reference_number: str,
    service: MoneyTransferService = Depends(_service),
    current_user: BankUser = Depends(get_current_user),
) -> list[MoneyTransferOut]:
    own_account_ids = {a.id for a in BankAccountService(service.db).get_all_accounts_by_user_id(current_user.id)}
    rows = [r for r in service.get_money_transfer(reference_number) if r.account_id in own_account_ids]
    if not rows:
        raise HTTPException(status_code=404, detail="Money transfer not found")
    return [_to_out(r) for r in rows]


@router.post("", response_model=MoneyTransferCreated)
def create_money_transfer(
    payload: MoneyTransferCreate,
    service: MoneyTransferService = Depends(_service),
    current_user: BankUser = Depends(get_current_user),
) -> MoneyTransferCreated:
    reference_number = service.send_internal(
        user_id=current_user.id,
        source_account_id=payload.accountId,
        destination_unique_id=payload.destinationBankAccountUniqueId,
        amount=payload.amount,
        description=payload.description,
    )
    if not reference_number:
        raise HTTPException(status_code=400, detail="Transfer rejected")

    return MoneyTransferCreated(referenceNumber=reference_number)
