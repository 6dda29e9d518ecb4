"""
Ledger API endpoints.

The API layer is thin. It handles HTTP concerns (status codes,
response formatting, commit/rollback) and delegates all ledger
logic to the LedgerService.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from investment_ledger.api.deps import get_ledger_mode, to_http_error
from investment_ledger.config import LedgerMode
from investment_ledger.errors import LedgerError
from investment_ledger.models.base import get_db
from investment_ledger.models.enums import SortField, SortDirection
from investment_ledger.services.ledger_service import LedgerService
from investment_ledger.services.projector import ProjectedEntry
from investment_ledger.schemas.ledger import (
    LedgerEntryCreate,
    LedgerEntryUpdate,
    LedgerEntryResponse,
    LedgerEntryListResponse,
    ProjectedEntryResponse,
)

router = APIRouter(tags=["Ledger"])


def _projected_response(projected: ProjectedEntry) -> ProjectedEntryResponse:
    stored = LedgerEntryResponse.model_validate(projected.entry)
    return ProjectedEntryResponse(
        **stored.model_dump(),
        cumulative_contribution=projected.cumulative_contribution,
        cumulative_contribution_pv=projected.cumulative_contribution_pv,
        cumulative_inflation=projected.cumulative_inflation,
        present_value=projected.present_value,
    )


@router.post(
    "/investments/{investment_id}/entries",
    response_model=LedgerEntryResponse,
    status_code=201,
)
def create_entry(
    investment_id: int,
    request: LedgerEntryCreate,
    db: Session = Depends(get_db),
    mode: LedgerMode = Depends(get_ledger_mode),
):
    """
    Record the next month of an investment.

    The month is assigned by the server: the starting month for
    the first entry, then one month after the latest. A 409 means
    another writer took the month; the request can be retried.
    """
    service = LedgerService(db, mode=mode)
    try:
        entry = service.create_entry(investment_id, request)
        db.commit()
        return entry
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)


@router.get(
    "/investments/{investment_id}/entries",
    response_model=LedgerEntryListResponse,
)
def list_entries(
    investment_id: int,
    sort_by: SortField = SortField.MONTH,
    direction: SortDirection = SortDirection.ASC,
    db: Session = Depends(get_db),
    mode: LedgerMode = Depends(get_ledger_mode),
):
    """
    List an investment's entries with derived metrics.

    Cumulative contribution, cumulative inflation and present
    value are always computed in month order, whatever order
    is requested for display.
    """
    service = LedgerService(db, mode=mode)
    try:
        projected = service.list_entries(investment_id, sort_by, direction)
    except LedgerError as e:
        raise to_http_error(e)

    return LedgerEntryListResponse(
        investment_id=investment_id,
        ledger_mode=mode,
        sort_by=sort_by,
        direction=direction,
        entries=[_projected_response(p) for p in projected],
    )


@router.patch("/entries/{entry_id}", response_model=LedgerEntryResponse)
def update_entry(
    entry_id: int,
    request: LedgerEntryUpdate,
    db: Session = Depends(get_db),
    mode: LedgerMode = Depends(get_ledger_mode),
):
    """Edit the return, inflation, contribution or notes of an entry."""
    service = LedgerService(db, mode=mode)
    try:
        entry = service.update_entry(entry_id, request)
        db.commit()
        return entry
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)


@router.delete("/entries/{entry_id}", status_code=204)
def delete_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    mode: LedgerMode = Depends(get_ledger_mode),
):
    """Delete an entry."""
    service = LedgerService(db, mode=mode)
    try:
        service.delete_entry(entry_id)
        db.commit()
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)
    return Response(status_code=204)
