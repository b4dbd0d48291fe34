from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core import constants
from app.models.base import Base, new_id

if TYPE_CHECKING:
    from app.models.bank_account import BankAccount
    from app.models.user import BankUser


class Card(Base):
    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    number: Mapped[str] = mapped_column(String(constants.Card.NUMBER_LENGTH))
    # 'MM/yy'
    expiry_date: Mapped[str] = mapped_column(String(constants.Card.EXPIRY_DATE_MAX_LENGTH))
    security_code: Mapped[str] = mapped_column(String(constants.Card.SECURITY_CODE_MAX_LENGTH))
    name: Mapped[str] = mapped_column(String(constants.Card.NAME_MAX_LENGTH))

    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), index=True)
    # No DB cascade here: SQL Server rejects a second cascade path from users.
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)

    account: Mapped["BankAccount"] = relationship(back_populates="cards")
    user: Mapped["BankUser"] = relationship(back_populates="cards")
