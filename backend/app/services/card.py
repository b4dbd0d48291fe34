from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core import constants
from app.core.generators import generate_card_expiry_date, generate_card_number, generate_card_security_code
from app.models.bank_account import BankAccount
from app.models.card import Card
from app.services.models import CardCreateServiceModel, CardDetailsServiceModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class CardService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, model: CardCreateServiceModel) -> bool:
        name = (model.name or "").strip()
        if not name or len(name) > constants.Card.NAME_MAX_LENGTH:
            return False
        if not model.account_id or not model.user_id:
            return False

        account = self.db.get(BankAccount, model.account_id)
        if not account or account.user_id != model.user_id:
            return False

        row = Card(
            name=name,
            number=generate_card_number(),
            expiry_date=generate_card_expiry_date(),
            security_code=generate_card_security_code(),
            account_id=account.id,
            user_id=model.user_id,
        )
        self.db.add(row)
        self.db.commit()
        logger.info("Card issued", extra={"user_id": row.user_id, "account_id": row.account_id})
        return True

    def get(self, card_id: str | None, model_cls: type[T] = CardDetailsServiceModel) -> T | None:
        if not card_id:
            return None
        row = self.db.get(Card, card_id)
        return model_cls.model_validate(row) if row else None

    def get_cards_by_user_id(self, user_id: str | None, model_cls: type[T] = CardDetailsServiceModel) -> list[T]:
        if not user_id:
            return []
        rows = self.db.scalars(select(Card).where(Card.user_id == user_id).order_by(Card.name)).all()
        return [model_cls.model_validate(r) for r in rows]

    def delete(self, card_id: str | None) -> bool:
        if not card_id:
            return False

        row = self.db.get(Card, card_id)
        if not row:
            return False

        self.db.delete(row)
        self.db.commit()
        return True
