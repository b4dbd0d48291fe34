"""Column limits shared by the ORM models, request schemas and service validation."""

from __future__ import annotations


class User:
    FULL_NAME_MAX_LENGTH = 50
    USER_NAME_MAX_LENGTH = 256
    EMAIL_MAX_LENGTH = 256
    PASSWORD_MIN_LENGTH = 6
    PASSWORD_MAX_LENGTH = 128


class BankAccount:
    NAME_MAX_LENGTH = 35
    UNIQUE_ID_MAX_LENGTH = 34


class Card:
    NAME_MAX_LENGTH = 50
    NUMBER_LENGTH = 16
    EXPIRY_DATE_MAX_LENGTH = 5
    SECURITY_CODE_MAX_LENGTH = 3


class MoneyTransfer:
    DESCRIPTION_MAX_LENGTH = 150
    REFERENCE_NUMBER_LENGTH = 17
    LAST_TRANSFERS_COUNT = 10
