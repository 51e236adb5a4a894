import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.orm import Session

from .models import Account

logger = logging.getLogger(__name__)


class LookupStrategy(ABC):
    """
    How the account store resolves an account number to a single account.
    """
    name = "base"

    @abstractmethod
    def find(self, db: Session, account_number: str) -> Optional[Account]:
        ...


class FullScanLookup(LookupStrategy):
    """
    Walk every account in id order and compare account numbers in Python.
    This is the legacy behavior: the first match wins, even if the store
    holds duplicates.
    """
    name = "scan"

    def find(self, db: Session, account_number: str) -> Optional[Account]:
        for account in db.query(Account).order_by(Account.id).all():
            if account.account_number == account_number:
                logger.debug("Found account %s by full scan", account_number)
                return account
        return None


class IndexedLookup(LookupStrategy):
    """
    Query by the indexed account_number column. Same first-by-id result as
    FullScanLookup, without loading the whole table.
    """
    name = "indexed"

    def find(self, db: Session, account_number: str) -> Optional[Account]:
        return (
            db.query(Account)
            .filter(Account.account_number == account_number)
            .order_by(Account.id)
            .first()
        )


_STRATEGIES = {
    FullScanLookup.name: FullScanLookup,
    IndexedLookup.name: IndexedLookup,
}


def get_lookup_strategy(name: str) -> LookupStrategy:
    try:
        return _STRATEGIES[name.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown account lookup strategy {name!r}; expected one of: {', '.join(sorted(_STRATEGIES))}"
        ) from None
