"""
Investment API endpoints.

Just enough of the asset store for the ledger to have
something to read from: register an investment, fetch it,
and ask for its current value.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from investment_ledger.api.deps import to_http_error
from investment_ledger.errors import LedgerError
from investment_ledger.models.base import get_db
from investment_ledger.services.asset_service import AssetService
from investment_ledger.services.ledger_service import LedgerService
from investment_ledger.schemas.asset import (
    InvestmentAssetCreate,
    InvestmentAssetResponse,
    CurrentValueResponse,
)

router = APIRouter(prefix="/investments", tags=["Investments"])


@router.post("", response_model=InvestmentAssetResponse, status_code=201)
def create_investment(
    request: InvestmentAssetCreate,
    db: Session = Depends(get_db),
):
    """Register an investment with its starting balance and month."""
    service = AssetService(db)
    asset = service.create_asset(request)
    db.commit()
    return asset


@router.get("/{investment_id}", response_model=InvestmentAssetResponse)
def get_investment(
    investment_id: int,
    db: Session = Depends(get_db),
):
    """Get investment details."""
    service = AssetService(db)
    try:
        return service.get_asset(investment_id)
    except LedgerError as e:
        raise to_http_error(e)


@router.get(
    "/{investment_id}/current-value",
    response_model=CurrentValueResponse,
)
def get_current_value(
    investment_id: int,
    db: Session = Depends(get_db),
):
    """
    Latest closing balance of the investment.

    Falls back to the starting balance while no month has
    been reported.
    """
    service = LedgerService(db)
    try:
        value, month = service.get_current_value(investment_id)
    except LedgerError as e:
        raise to_http_error(e)

    return CurrentValueResponse(
        investment_id=investment_id,
        current_value=value,
        as_of_month=month,
    )
