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
    from app.models.bank_account import BankAccount


class MoneyTransfer(Base):
    __tablename__ = "transfers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # Negative: money sent from the account. Positive: money received.
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"))
    description: Mapped[str | None] = mapped_column(
        String(constants.MoneyTransfer.DESCRIPTION_MAX_LENGTH), nullable=True
    )

    # Bank account unique ids
    source: Mapped[str] = mapped_column(String(constants.BankAccount.UNIQUE_ID_MAX_LENGTH), default="")
    destination: Mapped[str] = mapped_column(String(constants.BankAccount.UNIQUE_ID_MAX_LENGTH), default="")

    sender_name: Mapped[str] = mapped_column(String(constants.User.FULL_NAME_MAX_LENGTH), default="")
    recipient_name: Mapped[str] = mapped_column(String(constants.User.FULL_NAME_MAX_LENGTH), default="")

    made_on: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=utc_now, index=True)
    reference_number: Mapped[str] = mapped_column(String(64), default="", index=True)

    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), index=True)

    account: Mapped["BankAccount"] = relationship(back_populates="transfers")
