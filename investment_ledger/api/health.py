"""
Ledger health check.

Reports whether the ledger database answers and which ledger
mode the service is running in.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from investment_ledger.api.deps import get_ledger_mode
from investment_ledger.config import LedgerMode
from investment_ledger.models.base import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    mode: LedgerMode = Depends(get_ledger_mode),
):
    """
    "degraded" when the ledger database cannot be queried.

    ledger_mode tells a client whether an edit will cascade into
    later months.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception:
        logger.exception("Ledger database health check failed")
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "investment-ledger",
        "database": db_status,
        "ledger_mode": mode.value,
    }
