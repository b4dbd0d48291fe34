from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.core import constants


class MoneyTransferCreate(BaseModel):
    accountId: str
    destinationBankAccountUniqueId: str = Field(min_length=1, max_length=constants.BankAccount.UNIQUE_ID_MAX_LENGTH)
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    description: str | None = Field(default=None, max_length=constants.MoneyTransfer.DESCRIPTION_MAX_LENGTH)


class MoneyTransferCreated(BaseModel):
    referenceNumber: str


class MoneyTransferOut(BaseModel):
    id: str
    accountId: str
    amount: Decimal
    description: str | None
    source: str
    destination: str
    senderName: str
    recipientName: str
    madeOn: datetime
    referenceNumber: str
