from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from config import Config

# 1. Define the Database URL
DATABASE_URL = Config.DATABASE_URL


def _get_engine_kwargs():
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs = {"echo": False}  # Set echo to True to see SQL queries in console
    if DATABASE_URL.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


# 2. Create the SQLAlchemy Engine
engine = create_engine(DATABASE_URL, **_get_engine_kwargs())

# 3. Set up the SessionLocal (SessionMaker)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# 4. Define the Declarative Base
Base = declarative_base()


def get_db():
    """
    Dependency function to get a database session.
    One session per request; stores commit their own writes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        # Ensures the connection is closed after the request is finished
        db.close()
