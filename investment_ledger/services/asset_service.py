"""
Asset service: the investment records the ledger reads from.

Assets are owned by the surrounding application. The ledger
only needs to register one and look it up; everything else
about an asset is managed elsewhere.
"""

from sqlalchemy.orm import Session

from investment_ledger.errors import NotFoundError
from investment_ledger.models.investment_asset import InvestmentAsset
from investment_ledger.schemas.asset import InvestmentAssetCreate


class AssetService:

    def __init__(self, db: Session):
        self.db = db

    def create_asset(self, request: InvestmentAssetCreate) -> InvestmentAsset:
        """Register a new investment with its starting balance and month."""
        asset = InvestmentAsset(
            name=request.name,
            starting_balance=request.starting_balance,
            starting_month=request.starting_month,
        )
        self.db.add(asset)
        self.db.flush()
        return asset

    def get_asset(self, investment_id: int, lock: bool = False) -> InvestmentAsset:
        """
        Get an asset by ID.

        lock=True takes a row lock (SELECT ... FOR UPDATE) for the
        rest of the transaction, which serialises entry creation
        per asset on databases that support it.
        """
        asset = self.db.get(
            InvestmentAsset, investment_id, with_for_update=lock or None
        )
        if not asset:
            raise NotFoundError(f"Investment {investment_id} not found")
        return asset
