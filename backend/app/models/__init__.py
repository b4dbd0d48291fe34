from app.models.bank_account import BankAccount
from app.models.base import Base
from app.models.card import Card
from app.models.identity import Role, RoleClaim, UserClaim, UserLogin, UserRole, UserToken
from app.models.money_transfer import MoneyTransfer
from app.models.user import BankUser

__all__ = [
    "Base",
    "BankUser",
    "BankAccount",
    "Card",
    "MoneyTransfer",
    "Role",
    "RoleClaim",
    "UserClaim",
    "UserLogin",
    "UserRole",
    "UserToken",
]
