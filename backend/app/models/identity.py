"""Supporting identity tables: roles, claims, external logins and tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, new_id

if TYPE_CHECKING:
    from app.models.user import BankUser


class Role(Base):
    __tablename__ = "roles"
    __table_args__ = (
        Index(
            "RoleNameIndex",
            "normalized_name",
            unique=True,
            mssql_where=text("normalized_name IS NOT NULL"),
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    normalized_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    concurrency_stamp: Mapped[str | None] = mapped_column(String(36), nullable=True, default=new_id)

    users: Mapped[list["BankUser"]] = relationship(secondary="user_roles", back_populates="roles")


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True, index=True
    )


class UserClaim(Base):
    __tablename__ = "user_claims"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    claim_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    claim_value: Mapped[str | None] = mapped_column(Text, nullable=True)


class RoleClaim(Base):
    __tablename__ = "role_claims"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    role_id: Mapped[str] = mapped_column(String(36), ForeignKey("roles.id", ondelete="CASCADE"), index=True)
    claim_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    claim_value: Mapped[str | None] = mapped_column(Text, nullable=True)


class UserLogin(Base):
    __tablename__ = "user_logins"

    login_provider: Mapped[str] = mapped_column(String(128), primary_key=True)
    provider_key: Mapped[str] = mapped_column(String(128), primary_key=True)
    provider_display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)


class UserToken(Base):
    __tablename__ = "user_tokens"

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    login_provider: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
