from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core import constants
from app.core.datetime_utils import utc_now
from app.core.generators import generate_account_unique_id
from app.models.bank_account import BankAccount
from app.models.user import BankUser
from app.services.models import BankAccountCreateServiceModel, BankAccountDetailsServiceModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_UNIQUE_ID_ATTEMPTS = 10


def _is_valid_account_name(name: str | None) -> bool:
    return bool(name and name.strip()) and len(name) <= constants.BankAccount.NAME_MAX_LENGTH


class BankAccountService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, model: BankAccountCreateServiceModel) -> str | None:
        """Open an account for ``model.user_id``. Returns the new account id."""

        if not _is_valid_account_name(model.name) or not model.user_id:
            return None

        if not self.db.get(BankUser, model.user_id):
            return None

        unique_id = self._generate_unique_id()
        if unique_id is None:
            logger.error("Could not allocate a free account number", extra={"user_id": model.user_id})
            return None

        row = BankAccount(
            name=model.name.strip(),
            unique_id=unique_id,
            user_id=model.user_id,
            created_on=utc_now(),
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        logger.info("Bank account opened", extra={"user_id": row.user_id, "account_id": row.id})
        return row.id

    def _generate_unique_id(self) -> str | None:
        for _ in range(_UNIQUE_ID_ATTEMPTS):
            candidate = generate_account_unique_id()
            taken = self.db.scalar(select(BankAccount.id).where(BankAccount.unique_id == candidate).limit(1))
            if taken is None:
                return candidate
        return None

    def get_by_id(self, account_id: str | None, model_cls: type[T] = BankAccountDetailsServiceModel) -> T | None:
        if not account_id:
            return None
        row = self.db.get(BankAccount, account_id)
        return model_cls.model_validate(row) if row else None

    def get_by_unique_id(
        self, unique_id: str | None, model_cls: type[T] = BankAccountDetailsServiceModel
    ) -> T | None:
        if not unique_id:
            return None
        row = self.db.scalar(select(BankAccount).where(BankAccount.unique_id == unique_id))
        return model_cls.model_validate(row) if row else None

    def get_all_accounts_by_user_id(
        self, user_id: str | None, model_cls: type[T] = BankAccountDetailsServiceModel
    ) -> list[T]:
        if not user_id:
            return []
        rows = self.db.scalars(
            select(BankAccount).where(BankAccount.user_id == user_id).order_by(BankAccount.created_on.desc())
        ).all()
        return [model_cls.model_validate(r) for r in rows]

    def get_count_of_accounts_for_user(self, user_id: str | None) -> int:
        if not user_id:
            return 0
        count = self.db.scalar(select(func.count(BankAccount.id)).where(BankAccount.user_id == user_id))
        return int(count or 0)

    def change_account_name(self, account_id: str | None, new_name: str | None) -> bool:
        if not account_id or not _is_valid_account_name(new_name):
            return False

        row = self.db.get(BankAccount, account_id)
        if not row:
            return False

        row.name = new_name.strip()
        self.db.add(row)
        self.db.commit()
        return True
