from types import SimpleNamespace

import pytest

from services.approval import approve


def _account(balance=1000.0):
    return SimpleNamespace(account_number="12345", email_id="john@test.com", balance=balance)


def test_approve_credits_loan_amount_to_balance():
    assert approve(_account(1000.0), 5000.0) == (True, 6000.0)


@pytest.mark.parametrize("amount", [0.999, 0.5, 0, -10.0])
def test_decline_below_minimum_keeps_balance(amount):
    assert approve(_account(1000.0), amount) == (False, 1000.0)


def test_exactly_one_is_approved():
    assert approve(_account(1000.0), 1.0) == (True, 1001.0)


def test_missing_account_is_declined():
    assert approve(None, 5000.0) == (False, None)
    assert approve(None, 0) == (False, None)


def test_null_balance_treated_as_zero():
    assert approve(_account(None), 250.0) == (True, 250.0)
