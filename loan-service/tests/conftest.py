import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.database import Base
from db.models import Account


@pytest.fixture
def test_engine():
    # one shared in-memory connection so the TestClient thread sees the same tables
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(test_engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def john_account(db_session):
    account = Account(
        account_number="12345",
        email_id="john@test.com",
        balance=1000.0,
        name="John Doe",
        account_type="Savings",
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account
