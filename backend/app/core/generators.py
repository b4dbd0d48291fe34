from __future__ import annotations

import secrets
from datetime import date

from app.core import constants
from app.core.config import settings


def _random_digits(count: int) -> str:
    return "".join(str(secrets.randbelow(10)) for _ in range(count))


def generate_reference_number() -> str:
    length = constants.MoneyTransfer.REFERENCE_NUMBER_LENGTH
    return str(secrets.randbelow(9) + 1) + _random_digits(length - 1)


def _iban_numeric(value: str) -> int:
    # A=10 ... Z=35
    return int("".join(str(int(ch, 36)) for ch in value))


def iban_check_digits(country_code: str, bban: str) -> str:
    remainder = _iban_numeric(bban + country_code.upper() + "00") % 97
    return f"{98 - remainder:02d}"


def is_valid_iban(value: str) -> bool:
    value = value.replace(" ", "").upper()
    if len(value) < 5 or len(value) > constants.BankAccount.UNIQUE_ID_MAX_LENGTH or not value.isalnum():
        return False
    return _iban_numeric(value[4:] + value[:4]) % 97 == 1


def generate_account_unique_id(
    country_code: str | None = None,
    bank_code: str | None = None,
) -> str:
    country_code = (country_code or settings.bank_country_code).upper()
    bank_code = (bank_code or settings.bank_code).upper()
    bban = bank_code + _random_digits(10)
    return country_code + iban_check_digits(country_code, bban) + bban


def luhn_check_digit(payload: str) -> str:
    total = 0
    # Walk right-to-left; the digit next to the (future) check digit is doubled first.
    for index, ch in enumerate(reversed(payload)):
        digit = int(ch)
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return str((10 - total % 10) % 10)


def is_valid_luhn(number: str) -> bool:
    if not number.isdigit() or len(number) < 2:
        return False
    return luhn_check_digit(number[:-1]) == number[-1]


def generate_card_number(bin_prefix: str | None = None) -> str:
    bin_prefix = bin_prefix or settings.card_bin
    payload = bin_prefix + _random_digits(constants.Card.NUMBER_LENGTH - len(bin_prefix) - 1)
    return payload + luhn_check_digit(payload)


def generate_card_expiry_date(today: date | None = None, years: int | None = None) -> str:
    today = today or date.today()
    years = settings.card_valid_years if years is None else years
    return f"{today.month:02d}/{(today.year + years) % 100:02d}"


def generate_card_security_code() -> str:
    return _random_digits(constants.Card.SECURITY_CODE_MAX_LENGTH)
