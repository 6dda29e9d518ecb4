"""
Pydantic schemas for investment assets.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class InvestmentAssetCreate(BaseModel):
    """
    Request to register an investment.

    starting_month accepts a full date or "YYYY-MM"; either way
    it is stored as the first day of that month.
    """
    name: str = Field(min_length=1, max_length=100)
    starting_balance: Decimal = Field(default=Decimal("0"), ge=0, max_digits=19, decimal_places=4)
    starting_month: date

    @field_validator("starting_month", mode="before")
    @classmethod
    def accept_year_month(cls, v):
        if isinstance(v, str) and len(v) == 7:
            return f"{v}-01"
        return v

    @field_validator("starting_month")
    @classmethod
    def pin_to_first_day(cls, v: date) -> date:
        return v.replace(day=1)


class InvestmentAssetResponse(BaseModel):
    id: int
    name: str
    starting_balance: Decimal
    starting_month: date
    created_at: datetime

    model_config = {"from_attributes": True}


class CurrentValueResponse(BaseModel):
    """Latest closing balance, or the starting balance if nothing was reported."""
    investment_id: int
    current_value: Decimal
    as_of_month: date | None
