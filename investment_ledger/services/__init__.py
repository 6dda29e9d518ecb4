"""Business logic services."""

from investment_ledger.services.asset_service import AssetService
from investment_ledger.services.ledger_service import LedgerService

__all__ = ["AssetService", "LedgerService"]
