from sqlalchemy import func, select

from app.core.generators import is_valid_iban
from app.models.bank_account import BankAccount
from app.models.card import Card
from app.models.money_transfer import MoneyTransfer
from app.services.bank_account import BankAccountService
from app.services.models import BankAccountCreateServiceModel
from tests.factories import create_account, create_user


def test_create_opens_account_with_iban_unique_id(db_session):
    user = create_user(db_session)
    service = BankAccountService(db_session)

    account_id = service.create(BankAccountCreateServiceModel(name="Savings", user_id=user.id))

    account = service.get_by_id(account_id)
    assert account.name == "Savings"
    assert account.user_id == user.id
    assert account.balance == 0
    assert is_valid_iban(account.unique_id)
    assert account.unique_id.startswith("BG")


def test_create_rejects_invalid_input(db_session):
    user = create_user(db_session)
    service = BankAccountService(db_session)

    assert service.create(BankAccountCreateServiceModel(name="", user_id=user.id)) is None
    assert service.create(BankAccountCreateServiceModel(name="x" * 36, user_id=user.id)) is None
    assert service.create(BankAccountCreateServiceModel(name="Savings", user_id="missing")) is None
    assert service.create(BankAccountCreateServiceModel()) is None
    assert service.get_count_of_accounts_for_user(user.id) == 0


def test_lookups(db_session):
    user = create_user(db_session)
    other = create_user(db_session, user_name="other")
    first = create_account(db_session, user, name="First")
    create_account(db_session, user, name="Second")
    create_account(db_session, other)
    service = BankAccountService(db_session)

    assert service.get_by_unique_id(first.unique_id).id == first.id
    assert service.get_by_unique_id("nope") is None
    assert service.get_by_id(None) is None
    assert {a.name for a in service.get_all_accounts_by_user_id(user.id)} == {"First", "Second"}
    assert service.get_all_accounts_by_user_id("  ") == []
    assert service.get_count_of_accounts_for_user(user.id) == 2


def test_change_account_name(db_session):
    user = create_user(db_session)
    account = create_account(db_session, user)
    service = BankAccountService(db_session)

    assert service.change_account_name(account.id, "Renamed") is True
    assert service.get_by_id(account.id).name == "Renamed"
    assert service.change_account_name(account.id, "x" * 36) is False
    assert service.change_account_name("missing", "Renamed") is False


def test_deleting_user_cascades_to_accounts_cards_and_transfers(db_session):
    user = create_user(db_session)
    account = create_account(db_session, user)
    db_session.add(Card(name="c", number="4000000000000002", expiry_date="01/30", security_code="123",
                        account_id=account.id, user_id=user.id))
    db_session.add(MoneyTransfer(account_id=account.id, reference_number="1"))
    db_session.commit()

    db_session.delete(user)
    db_session.commit()

    for model in (BankAccount, Card, MoneyTransfer):
        assert db_session.scalar(select(func.count()).select_from(model)) == 0
