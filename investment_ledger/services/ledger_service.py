"""
Ledger service: the monthly return series of an investment.

This service enforces the rules of the series:
1. One entry per investment per month
2. New entries always append after the latest month
3. closing_balance = (opening + contribution) x (1 + return%)
4. Derived metrics are computed on read, never stored

No other code writes ledger entries. The caller owns the
transaction boundary and decides when to commit or rollback.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from investment_ledger.config import LedgerMode, get_settings
from investment_ledger.errors import (
    ConflictError,
    LedgerValidationError,
    NotFoundError,
)
from investment_ledger.models.enums import SortField, SortDirection
from investment_ledger.models.investment_asset import InvestmentAsset
from investment_ledger.models.ledger_entry import LedgerEntry
from investment_ledger.schemas.ledger import LedgerEntryCreate, LedgerEntryUpdate
from investment_ledger.services.asset_service import AssetService
from investment_ledger.services.compounding import (
    MAX_BALANCE,
    compound,
    fits_balance_column,
    to_decimal,
)
from investment_ledger.services.projector import ProjectedEntry, project_entries
from investment_ledger.services.sequencer import next_month

logger = logging.getLogger(__name__)

# First try plus one retry with a freshly resolved month
CREATE_ATTEMPTS = 2

# Only these fields feed the compounding formula
BALANCE_FIELDS = {"actual_return_rate", "contribution"}


class LedgerService:
    """
    All ledger entry operations pass through this service.

    The mode decides what an edit or delete does to the entries
    after it. In STRICT_HISTORICAL they are left as they were;
    in CONSISTENT_LEDGER they are recomputed forward. When no
    mode is given the configured LEDGER_MODE is used.
    """

    def __init__(self, db: Session, mode: LedgerMode | None = None):
        self.db = db
        self.mode = mode or get_settings().LEDGER_MODE
        self.asset_service = AssetService(db)

    # --- Lookups ---

    def _get_entry(self, entry_id: int) -> LedgerEntry:
        entry = self.db.get(LedgerEntry, entry_id)
        if not entry:
            raise NotFoundError(f"Entry {entry_id} not found")
        return entry

    def _latest_entry(self, investment_id: int) -> LedgerEntry | None:
        return self.db.execute(
            select(LedgerEntry)
            .where(LedgerEntry.investment_id == investment_id)
            .order_by(LedgerEntry.month.desc())
            .limit(1)
        ).scalar_one_or_none()

    def _previous_entry(self, investment_id: int, month: date) -> LedgerEntry | None:
        """The entry chronologically right before month, if any."""
        return self.db.execute(
            select(LedgerEntry)
            .where(
                LedgerEntry.investment_id == investment_id,
                LedgerEntry.month < month,
            )
            .order_by(LedgerEntry.month.desc())
            .limit(1)
        ).scalar_one_or_none()

    def _entries_after(self, investment_id: int, month: date) -> list[LedgerEntry]:
        entries = self.db.execute(
            select(LedgerEntry)
            .where(
                LedgerEntry.investment_id == investment_id,
                LedgerEntry.month > month,
            )
            .order_by(LedgerEntry.month)
        ).scalars().all()
        return list(entries)

    def _month_taken(self, investment_id: int, month: date) -> bool:
        return self.db.execute(
            select(LedgerEntry.id).where(
                LedgerEntry.investment_id == investment_id,
                LedgerEntry.month == month,
            )
        ).first() is not None

    @staticmethod
    def _opening_balance(
        asset: InvestmentAsset, previous: LedgerEntry | None
    ) -> Decimal:
        """Previous closing balance, or the asset's starting balance."""
        if previous is not None:
            return to_decimal(previous.closing_balance)
        return to_decimal(asset.starting_balance or 0)

    @staticmethod
    def _closing_balance(opening_balance, contribution, actual_return_rate) -> Decimal:
        """compound(), refusing balances the column cannot store."""
        balance = compound(opening_balance, contribution, actual_return_rate)
        if not fits_balance_column(balance):
            raise LedgerValidationError(
                f"Closing balance {balance} is out of range "
                f"(must stay below {MAX_BALANCE:,.0f} in magnitude)"
            )
        return balance

    # --- Mutations ---

    def create_entry(
        self, investment_id: int, request: LedgerEntryCreate
    ) -> LedgerEntry:
        """
        Append a new monthly entry to an investment's series.

        The month is always the one after the latest entry (or the
        starting month for an empty series). If that month turns
        out to be taken, because another writer got there first,
        the month is resolved again and the insert retried once.

        Raises NotFoundError if the investment does not exist and
        ConflictError if the retry conflicts as well. An entry whose
        closing balance would be out of range is refused with
        LedgerValidationError.
        """
        asset = self.asset_service.get_asset(investment_id, lock=True)

        for attempt in range(1, CREATE_ATTEMPTS + 1):
            try:
                entry = self._append_entry(asset, request)
            except ConflictError as e:
                if attempt == CREATE_ATTEMPTS:
                    raise
                logger.warning("%s; retrying with a fresh month", e)
                continue

            logger.info(
                "Created entry %s for investment %s, month %s, closing balance %s",
                entry.id, asset.id, entry.month.isoformat(), entry.closing_balance,
            )
            return entry

    def _append_entry(
        self, asset: InvestmentAsset, request: LedgerEntryCreate
    ) -> LedgerEntry:
        latest = self._latest_entry(asset.id)
        month = next_month(
            asset.starting_month, latest.month if latest else None
        )

        if self._month_taken(asset.id, month):
            raise ConflictError(
                f"Investment {asset.id} already has an entry for "
                f"{month:%Y-%m}"
            )

        entry = LedgerEntry(
            investment_id=asset.id,
            month=month,
            actual_return_rate=request.actual_return_rate,
            inflation_rate=request.inflation_rate,
            contribution=request.contribution,
            closing_balance=self._closing_balance(
                self._opening_balance(asset, latest),
                request.contribution,
                request.actual_return_rate,
            ),
            notes=request.notes,
        )

        # The savepoint lets a unique-constraint violation roll back
        # without losing the rest of the caller's transaction.
        try:
            with self.db.begin_nested():
                self.db.add(entry)
                self.db.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Investment {asset.id} already has an entry for "
                f"{month:%Y-%m}"
            ) from e
        except DataError as e:
            raise LedgerValidationError(
                f"Entry for {month:%Y-%m} does not fit the ledger columns"
            ) from e

        return entry

    def update_entry(
        self, entry_id: int, request: LedgerEntryUpdate
    ) -> LedgerEntry:
        """
        Apply a partial edit to an entry.

        The closing balance is recomputed from the chronological
        predecessor only when the return rate or the contribution
        is part of the edit. Later entries are recomputed as well
        in CONSISTENT_LEDGER mode only.

        Raises NotFoundError if the entry does not exist and
        LedgerValidationError if the edit carries no fields or
        pushes a closing balance out of range.
        """
        entry = self._get_entry(entry_id)

        changes = request.model_dump(exclude_unset=True)
        if not changes:
            raise LedgerValidationError("No fields to update")

        for field, value in changes.items():
            setattr(entry, field, value)

        if changes.keys() & BALANCE_FIELDS:
            previous = self._previous_entry(entry.investment_id, entry.month)
            entry.closing_balance = self._closing_balance(
                self._opening_balance(entry.investment, previous),
                entry.contribution,
                entry.actual_return_rate,
            )
            if self.mode == LedgerMode.CONSISTENT_LEDGER:
                self._recompute_after(
                    entry.investment_id, entry.month, entry.closing_balance
                )

        try:
            self.db.flush()
        except DataError as e:
            raise LedgerValidationError(
                f"Entry {entry_id} does not fit the ledger columns"
            ) from e
        logger.info(
            "Updated entry %s (%s)", entry.id, ", ".join(sorted(changes))
        )
        return entry

    def delete_entry(self, entry_id: int) -> None:
        """
        Remove an entry.

        In STRICT_HISTORICAL mode nothing else changes, so the
        entry after it keeps a balance compounded from a month that
        no longer exists. In CONSISTENT_LEDGER mode the later
        entries are recomputed from the deleted entry's predecessor.

        Raises NotFoundError if the entry does not exist.
        """
        entry = self._get_entry(entry_id)
        investment_id, month = entry.investment_id, entry.month
        asset = entry.investment

        self.db.delete(entry)
        self.db.flush()
        logger.info(
            "Deleted entry %s of investment %s, month %s",
            entry_id, investment_id, month.isoformat(),
        )

        if self.mode == LedgerMode.CONSISTENT_LEDGER:
            previous = self._previous_entry(investment_id, month)
            self._recompute_after(
                investment_id, month, self._opening_balance(asset, previous)
            )
            self.db.flush()

    def _recompute_after(
        self, investment_id: int, month: date, opening_balance: Decimal
    ) -> int:
        """
        Recompound every entry after month, in month order.

        Returns how many entries were touched.
        """
        later = self._entries_after(investment_id, month)
        for entry in later:
            entry.closing_balance = self._closing_balance(
                opening_balance, entry.contribution, entry.actual_return_rate
            )
            opening_balance = entry.closing_balance

        if later:
            logger.info(
                "Recomputed %d entries of investment %s after %s",
                len(later), investment_id, month.isoformat(),
            )
        return len(later)

    # --- Queries ---

    def get_entries(self, investment_id: int) -> list[LedgerEntry]:
        """Return all entries of an investment, oldest month first."""
        self.asset_service.get_asset(investment_id)
        entries = self.db.execute(
            select(LedgerEntry)
            .where(LedgerEntry.investment_id == investment_id)
            .order_by(LedgerEntry.month)
        ).scalars().all()
        return list(entries)

    def list_entries(
        self,
        investment_id: int,
        sort_by: SortField = SortField.MONTH,
        direction: SortDirection = SortDirection.ASC,
    ) -> list[ProjectedEntry]:
        """
        Entries of an investment with derived metrics attached.

        The metrics are recomputed over the full series on every
        call; sort_by/direction only change the presentation order.
        """
        return project_entries(
            self.get_entries(investment_id), sort_by, direction
        )

    def get_current_value(self, investment_id: int) -> tuple[Decimal, date | None]:
        """
        Current value of an investment and the month it is as of.

        That's the latest entry's closing balance, or the starting
        balance (with no month) when nothing has been reported yet.
        """
        asset = self.asset_service.get_asset(investment_id)
        latest = self._latest_entry(investment_id)
        if latest is None:
            return to_decimal(asset.starting_balance or 0), None
        return to_decimal(latest.closing_balance), latest.month
