"""
Shared FastAPI dependencies.
"""

from fastapi import HTTPException

from investment_ledger.config import LedgerMode, get_settings
from investment_ledger.errors import (
    ConflictError,
    LedgerError,
    LedgerValidationError,
    NotFoundError,
)

# Not-found is terminal for the caller, a conflict can be retried
ERROR_STATUS_CODES = {
    NotFoundError: 404,
    ConflictError: 409,
    LedgerValidationError: 400,
}


def get_ledger_mode() -> LedgerMode:
    """Configured ledger mode; overridden in tests."""
    return get_settings().LEDGER_MODE


def to_http_error(error: LedgerError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), 400)
    return HTTPException(status_code=status_code, detail=str(error))
