"""Service-layer data transfer objects.

Create models are deliberately permissive: the services validate them and
report failure with a falsy return value instead of raising.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ServiceModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class MoneyTransferCreateServiceModel(ServiceModel):
    description: str | None = None
    amount: Decimal = Decimal("0")
    account_id: str | None = None
    destination_bank_account_unique_id: str | None = None
    source: str | None = None
    sender_name: str | None = None
    recipient_name: str | None = None
    reference_number: str | None = None


class MoneyTransferListingServiceModel(ServiceModel):
    id: str
    account_id: str
    description: str | None = None
    amount: Decimal
    made_on: datetime
    source: str
    destination: str
    sender_name: str
    recipient_name: str
    reference_number: str


class BankAccountCreateServiceModel(ServiceModel):
    name: str | None = None
    user_id: str | None = None


class BankAccountDetailsServiceModel(ServiceModel):
    id: str
    name: str
    unique_id: str
    balance: Decimal
    created_on: datetime
    user_id: str


class CardCreateServiceModel(ServiceModel):
    name: str | None = None
    account_id: str | None = None
    user_id: str | None = None


class CardDetailsServiceModel(ServiceModel):
    id: str
    name: str
    number: str
    expiry_date: str
    security_code: str
    account_id: str
    user_id: str


class UserDetailsServiceModel(ServiceModel):
    id: str
    user_name: str | None = None
    email: str | None = None
    full_name: str
    is_active: bool
    lockout_end: datetime | None = None
    access_failed_count: int
