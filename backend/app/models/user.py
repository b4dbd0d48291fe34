from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core import constants
from app.models.base import Base, new_id

if TYPE_CHECKING:
    from app.models.bank_account import BankAccount
    from app.models.card import Card
    from app.models.identity import Role


class BankUser(Base):
    __tablename__ = "users"
    __table_args__ = (
        Index(
            "UserNameIndex",
            "normalized_user_name",
            unique=True,
            mssql_where=text("normalized_user_name IS NOT NULL"),
        ),
        Index("EmailIndex", "normalized_email"),
    )

    ROLE_ADMIN = "Administrator"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    user_name: Mapped[str | None] = mapped_column(String(constants.User.USER_NAME_MAX_LENGTH), nullable=True)
    normalized_user_name: Mapped[str | None] = mapped_column(String(constants.User.USER_NAME_MAX_LENGTH), nullable=True)
    email: Mapped[str | None] = mapped_column(String(constants.User.EMAIL_MAX_LENGTH), nullable=True)
    normalized_email: Mapped[str | None] = mapped_column(String(constants.User.EMAIL_MAX_LENGTH), nullable=True)
    email_confirmed: Mapped[bool] = mapped_column(Boolean, default=False)

    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Rotated whenever credentials change; tokens carrying an older stamp are rejected.
    security_stamp: Mapped[str | None] = mapped_column(String(36), nullable=True, default=new_id)
    concurrency_stamp: Mapped[str | None] = mapped_column(String(36), nullable=True, default=new_id)

    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone_number_confirmed: Mapped[bool] = mapped_column(Boolean, default=False)
    two_factor_enabled: Mapped[bool] = mapped_column(Boolean, default=False)

    lockout_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    lockout_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    access_failed_count: Mapped[int] = mapped_column(Integer, default=0)

    full_name: Mapped[str] = mapped_column(String(constants.User.FULL_NAME_MAX_LENGTH))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    accounts: Mapped[list["BankAccount"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    # Cards go away through their account; never null out card.user_id.
    cards: Mapped[list["Card"]] = relationship(back_populates="user", passive_deletes="all")
    roles: Mapped[list["Role"]] = relationship(secondary="user_roles", back_populates="users")

    def has_role(self, name: str) -> bool:
        return any(r.normalized_name == name.upper() for r in self.roles)
