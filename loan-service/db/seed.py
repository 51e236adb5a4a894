"""
Seed demo accounts so the loan endpoints have something to work against.
Run: python -m db.seed (from the loan-service dir).
"""
import logging

from sqlalchemy.orm import Session

from .database import Base, SessionLocal, engine
from .models import Account

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = [
    {
        "account_number": "12345",
        "email_id": "john@test.com",
        "balance": 1000.0,
        "name": "John Doe",
        "account_type": "Savings",
    },
    {
        "account_number": "67890",
        "email_id": "jane@test.com",
        "balance": 2500.0,
        "name": "Jane Smith",
        "account_type": "Checking",
    },
    {
        "account_number": "24680",
        "email_id": "mars@test.com",
        "balance": 0.0,
        "name": "Martian Rover",
        "account_type": "Investment",
    },
]


def seed_accounts(db: Session, accounts=None) -> int:
    """
    Insert any demo accounts whose account number is not stored yet.
    Returns how many were created.
    """
    accounts = accounts or DEMO_ACCOUNTS
    existing = {number for (number,) in db.query(Account.account_number)}
    created = 0
    for data in accounts:
        if data["account_number"] in existing:
            continue
        db.add(Account(**data))
        created += 1
    db.commit()
    logger.info("Seeded %d demo account(s), %d already present", created, len(accounts) - created)
    return created


def main():
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_accounts(db)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
