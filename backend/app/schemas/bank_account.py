from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.core import constants


class BankAccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=constants.BankAccount.NAME_MAX_LENGTH)


class BankAccountUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=constants.BankAccount.NAME_MAX_LENGTH)


class BankAccountOut(BaseModel):
    id: str
    name: str
    uniqueId: str
    balance: Decimal
    createdOn: datetime
