import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased

from .lookup import FullScanLookup, LookupStrategy
from .models import Account, Loan
from services.exceptions import StaleAccountError

logger = logging.getLogger(__name__)


class AccountStore:
    def __init__(self, db: Session, lookup: Optional[LookupStrategy] = None):
        self.db = db
        self.lookup = lookup or FullScanLookup()

    def count_matching(self, email: str, account_number: str) -> int:
        """
        Number of accounts owned by `email` with this account number.
        0 or 1 in a well-formed store; uniqueness is not enforced here.
        """
        return (
            self.db.query(func.count(Account.id))
            .filter(Account.email_id == email, Account.account_number == account_number)
            .scalar()
        )

    def find_by_account_number(self, account_number: str) -> Optional[Account]:
        return self.lookup.find(self.db, account_number)

    def update_balance(self, account_number: str, new_balance: float, expected_version: Optional[int] = None) -> None:
        """
        Overwrite the balance of the first account (lowest id) with this number
        and commit, the same account find_by_account_number returns. No-op when
        nothing matches. With `expected_version` set, the row is only written if
        its version is unchanged, otherwise StaleAccountError.
        """
        # aliased so the subquery is not correlated to the UPDATE target
        candidate = aliased(Account)
        first_id = (
            select(func.min(candidate.id))
            .where(candidate.account_number == account_number)
            .scalar_subquery()
        )
        query = self.db.query(Account).filter(Account.id == first_id)
        if expected_version is not None:
            query = query.filter(Account.version == expected_version)

        updated = query.update(
            {Account.balance: new_balance, Account.version: Account.version + 1},
            synchronize_session=False,
        )
        if updated == 0 and expected_version is not None:
            self.db.rollback()
            raise StaleAccountError(account_number, expected_version)

        self.db.commit()
        logger.debug("Updated balance for account %s to %f", account_number, new_balance)


class LoanStore:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, loan: Loan) -> Loan:
        """
        Persist a loan record and return it.
        Commits the transaction and refreshes the instance so the id is populated.
        """
        self.db.add(loan)
        self.db.commit()
        self.db.refresh(loan)
        logger.debug("Inserted loan %s for account: %s", loan.id, loan.account_number)
        return loan

    def find_by_email(self, email: str) -> List[Loan]:
        return (
            self.db.query(Loan)
            .filter(Loan.email == email)
            .order_by(Loan.id)
            .all()
        )
