from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core import constants
from app.core.datetime_utils import utc_now
from app.models.base import Base, new_id

if TYPE_CHECKING:
    from app.models.card import Card
    from app.models.money_transfer import MoneyTransfer
    from app.models.user import BankUser


class BankAccount(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"))
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utc_now)

    name: Mapped[str] = mapped_column(String(constants.BankAccount.NAME_MAX_LENGTH))
    # IBAN-shaped identifier shown to customers and used as transfer source/destination.
    unique_id: Mapped[str] = mapped_column(String(constants.BankAccount.UNIQUE_ID_MAX_LENGTH), unique=True)

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)

    user: Mapped["BankUser"] = relationship(back_populates="accounts")
    cards: Mapped[list["Card"]] = relationship(back_populates="account", cascade="all, delete-orphan")
    transfers: Mapped[list["MoneyTransfer"]] = relationship(
        back_populates="account", cascade="all, delete-orphan"
    )
