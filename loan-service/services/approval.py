from typing import Optional, Tuple

MINIMUM_LOAN_AMOUNT = 1


def approve(account, requested_amount: float) -> Tuple[bool, Optional[float]]:
    """
    Decision rules:
    - requested_amount < 1 -> declined, balance unchanged
    - account missing -> declined
    - otherwise -> approved, loan amount credited to the balance

    Returns (approved, new_balance). new_balance is None when there is no account.
    """
    if account is None:
        return False, None

    balance = account.balance if account.balance is not None else 0.0
    if requested_amount < MINIMUM_LOAN_AMOUNT:
        return False, balance

    return True, balance + requested_amount
