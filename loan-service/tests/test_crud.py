from datetime import datetime

import pytest

from db.crud import AccountStore, LoanStore
from db.lookup import FullScanLookup, IndexedLookup, LookupStrategy, get_lookup_strategy
from db.models import Account, Loan
from services.exceptions import StaleAccountError


def _loan(email="john@test.com", amount=5000.0, status="Approved"):
    return Loan(
        name="John Doe",
        email=email,
        account_type="Savings",
        account_number="12345",
        govt_id_type="Passport",
        govt_id_number="P123",
        loan_type="Personal",
        loan_amount=amount,
        interest_rate=5.5,
        time_period="12 months",
        status=status,
        timestamp=datetime(2024, 1, 15, 10, 30, 0),
    )


# Account store
def test_count_matching_requires_email_and_account(db_session, john_account):
    store = AccountStore(db_session)
    assert store.count_matching("john@test.com", "12345") == 1
    assert store.count_matching("wrong@test.com", "12345") == 0
    assert store.count_matching("john@test.com", "99999") == 0


def test_count_matching_does_not_assume_uniqueness(db_session, john_account):
    db_session.add(Account(account_number="12345", email_id="john@test.com", balance=5.0))
    db_session.commit()
    assert AccountStore(db_session).count_matching("john@test.com", "12345") == 2


@pytest.mark.parametrize("lookup", [FullScanLookup(), IndexedLookup()])
def test_find_by_account_number_returns_first_match(db_session, john_account, lookup):
    db_session.add(Account(account_number="12345", email_id="other@test.com", balance=1.0))
    db_session.add(Account(account_number="55555", email_id="jane@test.com", balance=2.0))
    db_session.commit()

    store = AccountStore(db_session, lookup)
    found = store.find_by_account_number("12345")
    assert found.id == john_account.id
    assert found.email_id == "john@test.com"
    assert store.find_by_account_number("00000") is None


def test_default_lookup_is_full_scan(db_session):
    assert isinstance(AccountStore(db_session).lookup, FullScanLookup)


def test_get_lookup_strategy_by_name():
    assert isinstance(get_lookup_strategy("scan"), FullScanLookup)
    assert isinstance(get_lookup_strategy(" Indexed "), IndexedLookup)
    with pytest.raises(ValueError):
        get_lookup_strategy("hash")


def test_update_balance_overwrites_and_bumps_version(db_session, john_account):
    store = AccountStore(db_session)
    store.update_balance("12345", 6000.0)

    account = store.find_by_account_number("12345")
    assert account.balance == 6000.0
    assert account.version == 1


def test_update_balance_unknown_account_is_noop(db_session, john_account):
    store = AccountStore(db_session)
    store.update_balance("99999", 1.0)
    assert store.find_by_account_number("12345").balance == 1000.0


def test_update_balance_with_current_version(db_session, john_account):
    store = AccountStore(db_session)
    store.update_balance("12345", 1500.0, expected_version=0)
    assert store.find_by_account_number("12345").balance == 1500.0


def test_update_balance_with_stale_version_raises(db_session, john_account):
    store = AccountStore(db_session)
    store.update_balance("12345", 1500.0, expected_version=0)

    with pytest.raises(StaleAccountError) as exc_info:
        store.update_balance("12345", 9999.0, expected_version=0)

    assert exc_info.value.account_number == "12345"
    account = store.find_by_account_number("12345")
    assert account.balance == 1500.0
    assert account.version == 1


# Loan store
def test_insert_assigns_id(db_session):
    loan = LoanStore(db_session).insert(_loan())
    assert loan.id is not None


def test_find_by_email_in_insertion_order(db_session):
    store = LoanStore(db_session)
    store.insert(_loan(amount=100.0))
    store.insert(_loan(email="jane@test.com", amount=200.0))
    store.insert(_loan(amount=0.0, status="Declined"))

    loans = store.find_by_email("john@test.com")
    assert [l.loan_amount for l in loans] == [100.0, 0.0]
    assert [l.status for l in loans] == ["Approved", "Declined"]


def test_find_by_email_empty(db_session):
    assert LoanStore(db_session).find_by_email("nobody@test.com") == []


def test_update_balance_touches_only_first_duplicate(db_session, john_account):
    other = Account(account_number="12345", email_id="other@test.com", balance=50.0)
    db_session.add(other)
    db_session.commit()

    AccountStore(db_session).update_balance("12345", 1010.0)

    balances = [a.balance for a in db_session.query(Account).order_by(Account.id)]
    assert balances == [1010.0, 50.0]


def test_update_balance_version_check_targets_first_duplicate(db_session, john_account):
    db_session.add(Account(account_number="12345", email_id="other@test.com", balance=50.0, version=4))
    db_session.commit()

    # version 4 belongs to the second row, which is never the target
    with pytest.raises(StaleAccountError):
        AccountStore(db_session).update_balance("12345", 1010.0, expected_version=4)

    balances = [a.balance for a in db_session.query(Account).order_by(Account.id)]
    assert balances == [1000.0, 50.0]


def test_lookup_strategy_must_implement_find():
    with pytest.raises(TypeError):
        LookupStrategy()

    class Incomplete(LookupStrategy):
        name = "incomplete"

    with pytest.raises(TypeError):
        Incomplete()
