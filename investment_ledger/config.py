"""
Ledger service configuration.

Read once from the environment (and a local .env file, if
present). LEDGER_MODE picks how edits and deletes treat later
months; DATABASE_URL points at the ledger database.
"""

import enum
import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class LedgerMode(str, enum.Enum):
    """
    How edits and deletes affect the rest of an investment's series.

    STRICT_HISTORICAL keeps every entry as a point-in-time snapshot:
    an edit recomputes only the edited entry and a delete touches
    nothing else. CONSISTENT_LEDGER recomputes every later entry so
    the compounding chain always holds.
    """
    STRICT_HISTORICAL = "strict_historical"
    CONSISTENT_LEDGER = "consistent_ledger"


class Settings:
    """
    Ledger settings.

    Values are read when this module is imported, so tests set
    DATABASE_URL and LEDGER_MODE in the environment first.
    """

    # Application
    APP_NAME: str = "Investment Return Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/investment_ledger"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Ledger behaviour. An unknown value fails here, at start-up,
    # instead of quietly falling back to one of the modes.
    LEDGER_MODE: LedgerMode = LedgerMode(
        os.getenv("LEDGER_MODE", LedgerMode.STRICT_HISTORICAL.value).lower()
    )


@lru_cache()
def get_settings() -> Settings:
    """Settings built once and shared across the ledger service."""
    return Settings()
