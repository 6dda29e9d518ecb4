"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from investment_ledger.models.base import Base
from investment_ledger.models.enums import SortField, SortDirection
from investment_ledger.models.investment_asset import InvestmentAsset
from investment_ledger.models.ledger_entry import LedgerEntry

__all__ = [
    "Base",
    "SortField",
    "SortDirection",
    "InvestmentAsset",
    "LedgerEntry",
]
