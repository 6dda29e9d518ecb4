"""
Investment Return Ledger: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import logging

from fastapi import FastAPI

from investment_ledger.config import get_settings
from investment_ledger.api.health import router as health_router
from investment_ledger.api.investments import router as investments_router
from investment_ledger.api.ledger import router as ledger_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Monthly investment returns with running and inflation-adjusted balances",
)

# Register routers
app.include_router(health_router)
app.include_router(investments_router)
app.include_router(ledger_router)

logger.info("Ledger mode: %s", settings.LEDGER_MODE.value)
