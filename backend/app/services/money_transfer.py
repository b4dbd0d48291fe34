from __future__ import annotations

import logging
from decimal import Decimal
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core import constants
from app.core.datetime_utils import utc_now
from app.core.email import EmailSender
from app.core.generators import generate_reference_number
from app.models.bank_account import BankAccount
from app.models.money_transfer import MoneyTransfer
from app.services.models import MoneyTransferCreateServiceModel, MoneyTransferListingServiceModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_REQUIRED_FIELDS = (
    "account_id",
    "source",
    "destination_bank_account_unique_id",
    "sender_name",
    "recipient_name",
    "reference_number",
)

_MAX_LENGTHS = {
    "description": constants.MoneyTransfer.DESCRIPTION_MAX_LENGTH,
    "source": constants.BankAccount.UNIQUE_ID_MAX_LENGTH,
    "destination_bank_account_unique_id": constants.BankAccount.UNIQUE_ID_MAX_LENGTH,
    "sender_name": constants.User.FULL_NAME_MAX_LENGTH,
    "recipient_name": constants.User.FULL_NAME_MAX_LENGTH,
}


def _validate_money_transfer_fields(model: MoneyTransferCreateServiceModel) -> bool:
    for field in _REQUIRED_FIELDS:
        value = getattr(model, field)
        if value is None or not str(value).strip():
            return False

    for field, max_length in _MAX_LENGTHS.items():
        value = getattr(model, field)
        if value is not None and len(value) > max_length:
            return False

    return model.amount is not None


class MoneyTransferService:
    def __init__(self, db: Session, email_sender: EmailSender) -> None:
        self.db = db
        self.email_sender = email_sender

    def get_money_transfer(
        self, reference_number: str | None, model_cls: type[T] = MoneyTransferListingServiceModel
    ) -> list[T]:
        if not reference_number:
            return []

        rows = self.db.scalars(
            select(MoneyTransfer)
            .where(MoneyTransfer.reference_number == reference_number)
            .order_by(MoneyTransfer.made_on.desc())
        ).all()
        return [model_cls.model_validate(r) for r in rows]

    def get_all_money_transfers(
        self, user_id: str | None, model_cls: type[T] = MoneyTransferListingServiceModel
    ) -> list[T]:
        return self._list_for_user(user_id, model_cls, limit=None)

    def get_all_money_transfers_for_account(
        self, account_id: str | None, model_cls: type[T] = MoneyTransferListingServiceModel
    ) -> list[T]:
        if not account_id:
            return []

        rows = self.db.scalars(
            select(MoneyTransfer)
            .where(MoneyTransfer.account_id == account_id)
            .order_by(MoneyTransfer.made_on.desc())
        ).all()
        return [model_cls.model_validate(r) for r in rows]

    def get_last_10_money_transfers_for_user(
        self, user_id: str | None, model_cls: type[T] = MoneyTransferListingServiceModel
    ) -> list[T]:
        return self._list_for_user(user_id, model_cls, limit=constants.MoneyTransfer.LAST_TRANSFERS_COUNT)

    def _list_for_user(self, user_id: str | None, model_cls: type[T], *, limit: int | None) -> list[T]:
        if not user_id:
            return []

        query = (
            select(MoneyTransfer)
            .join(BankAccount, BankAccount.id == MoneyTransfer.account_id)
            .where(BankAccount.user_id == user_id)
            .order_by(MoneyTransfer.made_on.desc())
        )
        if limit is not None:
            query = query.limit(limit)

        rows = self.db.scalars(query).all()
        return [model_cls.model_validate(r) for r in rows]

    def create_money_transfer(self, model: MoneyTransferCreateServiceModel) -> bool:
        if not _validate_money_transfer_fields(model):
            logger.info("Rejected money transfer: invalid fields", extra={"account_id": model.account_id})
            return False

        account = self.db.get(BankAccount, model.account_id)
        if not account:
            logger.info("Rejected money transfer: unknown account", extra={"account_id": model.account_id})
            return False

        row = self._add_money_transfer(account, model)
        self.db.commit()
        logger.info(
            "Money transfer recorded",
            extra={"account_id": account.id, "reference_number": row.reference_number},
        )

        self._notify(account, row)
        return True

    def send_internal(
        self,
        *,
        user_id: str,
        source_account_id: str,
        destination_unique_id: str,
        amount: Decimal,
        description: str | None = None,
    ) -> str | None:
        """Move money between two accounts of this bank.

        Writes a negative transfer on the source account and a positive one on
        the destination, sharing one reference number, in a single commit.
        Returns the reference number, or None when the transfer is rejected.
        """

        if amount is None or amount <= 0:
            return None

        source = self.db.get(BankAccount, source_account_id)
        if not source or source.user_id != user_id:
            return None

        destination = self.db.scalar(select(BankAccount).where(BankAccount.unique_id == destination_unique_id))
        if not destination or destination.id == source.id:
            return None

        if source.balance < amount:
            logger.info("Rejected money transfer: insufficient funds", extra={"account_id": source.id})
            return None

        reference_number = generate_reference_number()
        common = {
            "description": description,
            "source": source.unique_id,
            "destination_bank_account_unique_id": destination.unique_id,
            "sender_name": source.user.full_name,
            "recipient_name": destination.user.full_name,
            "reference_number": reference_number,
        }
        outgoing = MoneyTransferCreateServiceModel(account_id=source.id, amount=-amount, **common)
        incoming = MoneyTransferCreateServiceModel(account_id=destination.id, amount=amount, **common)
        if not _validate_money_transfer_fields(outgoing) or not _validate_money_transfer_fields(incoming):
            return None

        sent = self._add_money_transfer(source, outgoing)
        received = self._add_money_transfer(destination, incoming)
        self.db.commit()
        logger.info(
            "Internal transfer completed",
            extra={"account_id": source.id, "reference_number": reference_number},
        )

        self._notify(source, sent)
        self._notify(destination, received)
        return reference_number

    def _add_money_transfer(self, account: BankAccount, model: MoneyTransferCreateServiceModel) -> MoneyTransfer:
        row = MoneyTransfer(
            account_id=account.id,
            amount=model.amount,
            description=model.description,
            source=model.source,
            destination=model.destination_bank_account_unique_id,
            sender_name=model.sender_name,
            recipient_name=model.recipient_name,
            reference_number=model.reference_number,
            made_on=utc_now(),
        )
        account.balance = (account.balance or Decimal("0")) + model.amount
        self.db.add_all([row, account])
        self.db.flush()
        return row

    def _notify(self, account: BankAccount, transfer: MoneyTransfer) -> None:
        receiver = account.user.email if account.user else None
        if not receiver:
            logger.debug("No e-mail address for owner of account %s", account.id)
            return

        if transfer.amount < 0:
            subject = "You have sent money"
            message = (
                f"{abs(transfer.amount):.2f} has been sent from account {transfer.source} "
                f"to {transfer.recipient_name} ({transfer.destination})."
            )
        else:
            subject = "You have received money"
            message = (
                f"{transfer.amount:.2f} has been received on account {transfer.destination} "
                f"from {transfer.sender_name} ({transfer.source})."
            )
        message += f"<br/>Reference number: {transfer.reference_number}"

        # The transfer is already committed; a failing transport must not surface to the caller.
        try:
            delivered = self.email_sender.send_email(receiver, subject, message)
        except Exception:
            logger.exception("Transfer notification to %s failed", receiver)
            return

        if not delivered:
            logger.warning("Transfer notification to %s was not delivered", receiver)
