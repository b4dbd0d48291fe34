from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core import constants
from app.core.datetime_utils import utc_now
from app.models.bank_account import BankAccount
from app.models.money_transfer import MoneyTransfer
from app.models.user import BankUser
from app.services.models import MoneyTransferCreateServiceModel, MoneyTransferListingServiceModel
from app.services.money_transfer import MoneyTransferService

SAMPLE_ID = "gsdxcvew-sdfdscx-xcgds"
SAMPLE_DESCRIPTION = "I'm sending money due to..."
SAMPLE_AMOUNT = Decimal("10")
SAMPLE_RECIPIENT_NAME = "test"
SAMPLE_SENDER_NAME = "melik"
SAMPLE_DESTINATION = "dgsfcx-arq12wasdasdzxxcv"

SAMPLE_BANK_ACCOUNT_NAME = "Test bank account name"
SAMPLE_BANK_ACCOUNT_ID = "1"
SAMPLE_BANK_ACCOUNT_UNIQUE_ID = "UniqueId"
SAMPLE_REFERENCE_NUMBER = "18832258557125540"

SAMPLE_USER_FULL_NAME = "user user"
SAMPLE_USER_ID = "adfsdvxc-123ewsf"

INVALID_IDS = [
    None,
    " dassdgdf",
    " ",
    "!  ",
    "     10   ",
    "  sdgsfcx-arq12wasdasdzxxcvc   ",
]


@pytest.fixture
def service(db_session, email_sender):
    return MoneyTransferService(db_session, email_sender)


def seed_user(db, email=None):
    user = BankUser(id=SAMPLE_USER_ID, full_name=SAMPLE_USER_FULL_NAME, email=email)
    db.add(user)
    db.commit()
    return user


def seed_bank_account(db, email=None):
    seed_user(db, email=email)
    account = BankAccount(
        id=SAMPLE_BANK_ACCOUNT_ID,
        name=SAMPLE_BANK_ACCOUNT_NAME,
        unique_id=SAMPLE_BANK_ACCOUNT_UNIQUE_ID,
        user_id=SAMPLE_USER_ID,
    )
    db.add(account)
    db.commit()
    return account


def seed_money_transfer(db):
    account = seed_bank_account(db)
    transfer = MoneyTransfer(
        id=SAMPLE_ID,
        description=SAMPLE_DESCRIPTION,
        amount=SAMPLE_AMOUNT,
        account_id=account.id,
        destination=SAMPLE_DESTINATION,
        source=SAMPLE_BANK_ACCOUNT_ID,
        sender_name=SAMPLE_SENDER_NAME,
        recipient_name=SAMPLE_RECIPIENT_NAME,
        made_on=utc_now(),
    )
    db.add(transfer)
    db.commit()
    return transfer


def seed_empty_transfers(db, count, *, spread_minutes=False):
    seed_bank_account(db)
    now = utc_now()
    for i in range(count):
        row = MoneyTransfer(id=f"{SAMPLE_ID}_{i}", account_id=SAMPLE_BANK_ACCOUNT_ID)
        if spread_minutes:
            row.made_on = now + timedelta(minutes=i)
        db.add(row)
    db.commit()


def prepare_create_model(
    description=SAMPLE_DESCRIPTION,
    amount=SAMPLE_AMOUNT,
    account_id=SAMPLE_BANK_ACCOUNT_ID,
    destination_bank_unique_id=SAMPLE_DESTINATION,
    source=SAMPLE_BANK_ACCOUNT_ID,
    sender_name=SAMPLE_SENDER_NAME,
    recipient_name=SAMPLE_RECIPIENT_NAME,
):
    return MoneyTransferCreateServiceModel(
        description=description,
        amount=amount,
        account_id=account_id,
        destination_bank_account_unique_id=destination_bank_unique_id,
        source=source,
        sender_name=sender_name,
        recipient_name=recipient_name,
        reference_number=SAMPLE_REFERENCE_NUMBER,
    )


def transfer_count(db):
    return db.scalar(select(func.count(MoneyTransfer.id)))


@pytest.mark.parametrize(
    "reference_number",
    [" 031069130864508423", "24675875i6452436 ", "! 68o4473485669 ", "   845768798069  10   ", "45848o02835yu56="],
)
def test_get_money_transfer_with_invalid_number_returns_empty(db_session, service, reference_number):
    seed_money_transfer(db_session)

    assert service.get_money_transfer(reference_number, MoneyTransferListingServiceModel) == []


def test_get_money_transfer_with_valid_number_returns_matching_transfers(db_session, service):
    seed_bank_account(db_session)
    db_session.add(
        MoneyTransfer(
            description=SAMPLE_DESCRIPTION,
            amount=SAMPLE_AMOUNT,
            account_id=SAMPLE_BANK_ACCOUNT_ID,
            destination=SAMPLE_DESTINATION,
            source=SAMPLE_BANK_ACCOUNT_ID,
            sender_name=SAMPLE_SENDER_NAME,
            recipient_name=SAMPLE_RECIPIENT_NAME,
            made_on=utc_now(),
            reference_number=SAMPLE_REFERENCE_NUMBER,
        )
    )
    db_session.commit()

    result = service.get_money_transfer(SAMPLE_REFERENCE_NUMBER, MoneyTransferListingServiceModel)

    assert result
    assert all(t.reference_number == SAMPLE_REFERENCE_NUMBER for t in result)


@pytest.mark.parametrize("user_id", INVALID_IDS)
def test_get_all_money_transfers_with_invalid_user_id_returns_empty(db_session, service, user_id):
    seed_money_transfer(db_session)

    assert service.get_all_money_transfers(user_id, MoneyTransferListingServiceModel) == []


@pytest.mark.parametrize("account_id", INVALID_IDS)
def test_get_all_money_transfers_for_account_with_invalid_id_returns_empty(db_session, service, account_id):
    seed_money_transfer(db_session)

    assert service.get_all_money_transfers_for_account(account_id, MoneyTransferListingServiceModel) == []


@pytest.mark.parametrize("user_id", INVALID_IDS)
def test_get_last_10_money_transfers_with_invalid_user_id_returns_empty(db_session, service, user_id):
    seed_money_transfer(db_session)

    assert service.get_last_10_money_transfers_for_user(user_id, MoneyTransferListingServiceModel) == []


def test_create_with_unknown_account_returns_false_and_writes_nothing(db_session, service):
    seed_bank_account(db_session)
    model = prepare_create_model(account_id="another id")

    assert service.create_money_transfer(model) is False
    assert transfer_count(db_session) == 0


def test_create_with_empty_model_returns_false_and_writes_nothing(db_session, service):
    assert service.create_money_transfer(MoneyTransferCreateServiceModel()) is False
    assert transfer_count(db_session) == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"description": "m" * (constants.MoneyTransfer.DESCRIPTION_MAX_LENGTH + 1)},
        {"destination_bank_unique_id": "m" * (constants.BankAccount.UNIQUE_ID_MAX_LENGTH + 1)},
        {"recipient_name": "m" * (constants.User.FULL_NAME_MAX_LENGTH + 1)},
        {"sender_name": "m" * (constants.User.FULL_NAME_MAX_LENGTH + 1)},
        {"source": "m" * (constants.BankAccount.UNIQUE_ID_MAX_LENGTH + 1)},
        {"sender_name": "   "},
    ],
    ids=["description", "destination", "recipient_name", "sender_name", "source", "blank_sender"],
)
def test_create_with_invalid_field_returns_false_and_writes_nothing(db_session, service, overrides):
    seed_bank_account(db_session)
    model = prepare_create_model(**overrides)

    assert service.create_money_transfer(model) is False
    assert transfer_count(db_session) == 0


def test_create_with_valid_model_and_negative_amount_inserts_transfer(db_session, service):
    seed_bank_account(db_session)
    db_count = transfer_count(db_session)
    # A negative amount means money is being sent.
    model = prepare_create_model(amount=Decimal("-10"))

    assert service.create_money_transfer(model) is True
    assert transfer_count(db_session) == db_count + 1


def test_create_with_valid_model_inserts_transfer_and_updates_balance(db_session, service):
    seed_bank_account(db_session)
    db_count = transfer_count(db_session)

    assert service.create_money_transfer(prepare_create_model()) is True
    assert transfer_count(db_session) == db_count + 1

    db_session.expire_all()
    account = db_session.get(BankAccount, SAMPLE_BANK_ACCOUNT_ID)
    assert account.balance == SAMPLE_AMOUNT

    row = db_session.scalar(select(MoneyTransfer))
    assert row.destination == SAMPLE_DESTINATION
    assert row.reference_number == SAMPLE_REFERENCE_NUMBER
    assert row.made_on is not None


def test_create_notifies_account_owner(db_session, service, email_sender):
    seed_bank_account(db_session, email="owner@example.com")

    assert service.create_money_transfer(prepare_create_model(amount=Decimal("-5"))) is True

    assert len(email_sender.sent) == 1
    receiver, subject, message = email_sender.sent[0]
    assert receiver == "owner@example.com"
    assert subject == "You have sent money"
    assert SAMPLE_REFERENCE_NUMBER in message


def test_create_without_owner_email_sends_nothing(db_session, service, email_sender):
    seed_bank_account(db_session)

    assert service.create_money_transfer(prepare_create_model()) is True
    assert email_sender.sent == []


def test_get_all_money_transfers_returns_correct_count(db_session, service):
    seed_empty_transfers(db_session, 10)

    assert len(service.get_all_money_transfers(SAMPLE_USER_ID, MoneyTransferListingServiceModel)) == 10


def test_get_all_money_transfers_is_ordered_by_made_on_descending(db_session, service):
    seed_empty_transfers(db_session, 10, spread_minutes=True)

    result = service.get_all_money_transfers(SAMPLE_USER_ID, MoneyTransferListingServiceModel)

    made_on = [t.made_on for t in result]
    assert made_on == sorted(made_on, reverse=True)


def test_get_all_money_transfers_with_valid_user_id_returns_correct_entities(db_session, service):
    model = seed_money_transfer(db_session)

    result = service.get_all_money_transfers(SAMPLE_USER_ID, MoneyTransferListingServiceModel)

    assert result
    assert all(isinstance(t, MoneyTransferListingServiceModel) for t in result)
    assert all(t.source == model.source for t in result)


def test_get_all_money_transfers_for_account_returns_correct_count(db_session, service):
    seed_empty_transfers(db_session, 10)

    result = service.get_all_money_transfers_for_account(SAMPLE_BANK_ACCOUNT_ID, MoneyTransferListingServiceModel)

    assert len(result) == 10


def test_get_all_money_transfers_for_account_is_ordered_by_made_on_descending(db_session, service):
    seed_empty_transfers(db_session, 10, spread_minutes=True)

    result = service.get_all_money_transfers_for_account(SAMPLE_BANK_ACCOUNT_ID, MoneyTransferListingServiceModel)

    made_on = [t.made_on for t in result]
    assert made_on == sorted(made_on, reverse=True)


def test_get_all_money_transfers_for_account_returns_correct_entities(db_session, service):
    model = seed_money_transfer(db_session)

    result = service.get_all_money_transfers_for_account(SAMPLE_BANK_ACCOUNT_ID, MoneyTransferListingServiceModel)

    assert result
    assert all(t.source == model.source for t in result)


def test_get_last_10_money_transfers_returns_at_most_ten(db_session, service):
    seed_empty_transfers(db_session, 22)

    result = service.get_last_10_money_transfers_for_user(SAMPLE_USER_ID, MoneyTransferListingServiceModel)

    assert len(result) == 10


def test_get_last_10_money_transfers_returns_newest_first(db_session, service):
    seed_empty_transfers(db_session, 22, spread_minutes=True)

    result = service.get_last_10_money_transfers_for_user(SAMPLE_USER_ID, MoneyTransferListingServiceModel)

    made_on = [t.made_on for t in result]
    assert made_on == sorted(made_on, reverse=True)
    assert result[0].id == f"{SAMPLE_ID}_21"


def test_get_last_10_money_transfers_returns_correct_entities(db_session, service):
    model = seed_money_transfer(db_session)

    result = service.get_last_10_money_transfers_for_user(SAMPLE_USER_ID, MoneyTransferListingServiceModel)

    assert result
    assert all(t.source == model.source for t in result)
