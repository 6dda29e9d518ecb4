"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real database. Each test gets a fresh schema and a session
that rolls back afterwards.
"""

import os

# Must be set before investment_ledger is imported: settings and
# the engine are built at import time.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from investment_ledger.api.deps import get_ledger_mode
from investment_ledger.config import LedgerMode
from investment_ledger.main import app
from investment_ledger.models import Base
from investment_ledger.models.base import get_db
from investment_ledger.schemas.asset import InvestmentAssetCreate
from investment_ledger.services.asset_service import AssetService


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)


# pysqlite defers BEGIN until the first write, which breaks the
# SAVEPOINT used by entry creation. Take over transaction control
# so savepoints nest inside a real transaction.
@event.listens_for(engine, "connect")
def _disable_pysqlite_transactions(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine, "begin")
def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def asset(db_session):
    """Investment starting at 1000 in January 2024."""
    created = AssetService(db_session).create_asset(InvestmentAssetCreate(
        name="Fixed income fund",
        starting_balance=Decimal("1000"),
        starting_month=date(2024, 1, 1),
    ))
    db_session.commit()
    return created


@pytest.fixture
def ledger_mode():
    """Mode the API runs with; override in a test module to switch."""
    return LedgerMode.STRICT_HISTORICAL


@pytest.fixture
def client(db_session, ledger_mode):
    """
    Provide a test client with the test database.

    get_db is overridden so the app uses the test session, and
    get_ledger_mode so each test picks its mode explicitly.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ledger_mode] = lambda: ledger_mode
    yield TestClient(app)
    app.dependency_overrides.clear()
