"""
Investment asset model.

The asset owns a series of monthly ledger entries. The ledger
only ever reads two of its fields: the starting balance and
the starting month, and only when the series is empty.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investment_ledger.models.base import Base


class InvestmentAsset(Base):
    __tablename__ = "investment_assets"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    starting_balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    # Always the first day of a month
    starting_month: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    # Deleting the asset removes its whole series
    entries: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="investment",
        cascade="all, delete-orphan",
        order_by="LedgerEntry.month",
    )

    def __repr__(self) -> str:
        return (
            f"<InvestmentAsset {self.name} "
            f"{self.starting_balance} from {self.starting_month:%Y-%m}>"
        )
