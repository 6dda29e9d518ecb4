"""
Ledger database wiring.

InvestmentAsset and LedgerEntry are declared on Base; the API
opens one session per request through get_db() and commits or
rolls back the ledger mutation itself.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from investment_ledger.config import get_settings

settings = get_settings()

# --- Engine ---
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# --- Session Factory ---
# Services only flush. A create and its month retry, or an edit
# and its forward recompute, commit together or not at all.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Session for one ledger request.

    Whatever the endpoint left uncommitted is discarded when the
    session closes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
