from sqlalchemy import Column, String, Float, Integer, DateTime
from .database import Base


class Account(Base):
    __tablename__ = "accounts"

    # surrogate key; also the stable order used by full-scan lookups
    id = Column(Integer, primary_key=True, autoincrement=True)
    account_number = Column(String(64), nullable=False, index=True)
    email_id = Column(String(255), nullable=False)
    balance = Column(Float, nullable=True, default=0.0)
    name = Column(String(255))
    account_type = Column(String(50))
    # bumped on every balance update, checked only when optimistic locking is on
    version = Column(Integer, nullable=False, default=0, server_default="0")

    def __repr__(self):
        return f"<Account account_number={self.account_number!r} email_id={self.email_id!r} balance={self.balance!r}>"


class Loan(Base):
    """Audit record of one loan decision. Rows are never updated or deleted."""

    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255))
    email = Column(String(255), nullable=False, index=True)
    account_type = Column(String(50))
    account_number = Column(String(64), nullable=False)
    govt_id_type = Column(String(50))
    govt_id_number = Column(String(100))
    loan_type = Column(String(50))
    loan_amount = Column(Float, nullable=False)
    interest_rate = Column(Float)
    time_period = Column(String(50))
    status = Column(String(20), nullable=False)
    # naive local time, rendered without offset in loan history
    timestamp = Column(DateTime, nullable=False)
