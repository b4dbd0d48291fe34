from __future__ import annotations

from pydantic import BaseModel, Field

from app.core import constants


class CardCreate(BaseModel):
    name: str = Field(min_length=1, max_length=constants.Card.NAME_MAX_LENGTH)
    accountId: str


class CardOut(BaseModel):
    id: str
    name: str
    number: str
    expiryDate: str
    securityCode: str
    accountId: str
