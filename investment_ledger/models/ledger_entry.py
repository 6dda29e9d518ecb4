"""
Ledger entry model.

One entry is one monthly report for an investment: the return
earned, the month's inflation and any contribution made.
Entries of an asset form a chain ordered by month; each closing
balance is compounded from the previous one.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Numeric, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investment_ledger.models.base import Base


class LedgerEntry(Base):
    """
    A monthly performance report for one investment.

    closing_balance is derived but persisted for fast reads.
    The (investment_id, month) unique constraint is the last
    line of defence against two creates racing for the same
    month; LedgerService turns a violation into a ConflictError.
    """

    __tablename__ = "ledger_entries"
    __table_args__ = (
        UniqueConstraint(
            "investment_id", "month",
            name="uq_ledger_entries_investment_month",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    investment_id: Mapped[int] = mapped_column(
        ForeignKey("investment_assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month: Mapped[date] = mapped_column(Date, nullable=False)
    actual_return_rate: Mapped[Decimal] = mapped_column(
        Numeric(9, 4), nullable=False, default=Decimal("0")
    )
    inflation_rate: Mapped[Decimal] = mapped_column(
        Numeric(9, 4), nullable=False, default=Decimal("0")
    )
    # Positive = deposit, negative = withdrawal
    contribution: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    closing_balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(
        String(500), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    investment: Mapped["InvestmentAsset"] = relationship(
        back_populates="entries"
    )

    def __repr__(self) -> str:
        return (
            f"<LedgerEntry {self.month:%Y-%m} "
            f"{self.actual_return_rate}% -> {self.closing_balance}>"
        )
