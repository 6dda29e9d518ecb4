"""
Pydantic schemas for ledger entries.

These define the API contract. The month and the closing
balance are never accepted from the client: the service
assigns the month and derives the balance.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from investment_ledger.config import LedgerMode
from investment_ledger.models.enums import SortField, SortDirection


# --- Request Schemas ---

class LedgerEntryCreate(BaseModel):
    """One month's report. Rates are percentages, e.g. 1.5 for 1.5%."""
    actual_return_rate: Decimal = Field(ge=-100, max_digits=9, decimal_places=4)
    inflation_rate: Decimal = Field(default=Decimal("0"), gt=-100, max_digits=9, decimal_places=4)
    contribution: Decimal = Field(default=Decimal("0"), max_digits=19, decimal_places=4)
    notes: str | None = Field(default=None, max_length=500)


class LedgerEntryUpdate(BaseModel):
    """
    Partial edit of an entry.

    Only the fields actually sent are applied. Numeric fields
    can be omitted but not nulled; notes can be cleared with null.
    """
    actual_return_rate: Decimal | None = Field(default=None, ge=-100, max_digits=9, decimal_places=4)
    inflation_rate: Decimal | None = Field(default=None, gt=-100, max_digits=9, decimal_places=4)
    contribution: Decimal | None = Field(default=None, max_digits=19, decimal_places=4)
    notes: str | None = Field(default=None, max_length=500)

    @field_validator("actual_return_rate", "inflation_rate", "contribution")
    @classmethod
    def numbers_not_null(cls, v: Decimal | None) -> Decimal:
        if v is None:
            raise ValueError("value may be omitted but not null")
        return v


# --- Response Schemas ---

class LedgerEntryResponse(BaseModel):
    """A stored entry."""
    id: int
    investment_id: int
    month: date
    actual_return_rate: Decimal
    inflation_rate: Decimal
    contribution: Decimal
    closing_balance: Decimal
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectedEntryResponse(LedgerEntryResponse):
    """A stored entry plus the metrics computed at read time."""
    cumulative_contribution: Decimal
    cumulative_contribution_pv: Decimal
    cumulative_inflation: Decimal
    present_value: Decimal


class LedgerEntryListResponse(BaseModel):
    investment_id: int
    ledger_mode: LedgerMode
    sort_by: SortField
    direction: SortDirection
    entries: list[ProjectedEntryResponse]
