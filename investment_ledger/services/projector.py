"""
Read-time projection of derived ledger metrics.

Nothing here is persisted. Every listing recomputes, from the
full series of one investment:

- cumulative_contribution: running sum of contributions
- cumulative_contribution_pv: the same running sum valued at the
  time each contribution was made (past contributions are not
  discounted)
- cumulative_inflation: (1 + previous) x (1 + rate / 100) - 1
- present_value: closing_balance / (1 + cumulative_inflation)

Running totals only mean something in month order, so the pass
always walks the series chronologically and only then reorders
the result for display.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from investment_ledger.models.enums import SortField, SortDirection
from investment_ledger.models.ledger_entry import LedgerEntry
from investment_ledger.services.compounding import (
    BALANCE_QUANTUM,
    HUNDRED,
    to_decimal,
)

INFLATION_QUANTUM = Decimal("0.00000001")

SORT_KEYS = {
    SortField.MONTH: lambda p: p.entry.month,
    SortField.RETURN: lambda p: to_decimal(p.entry.actual_return_rate),
    SortField.CONTRIBUTION: lambda p: to_decimal(p.entry.contribution),
    SortField.BALANCE: lambda p: to_decimal(p.entry.closing_balance),
}


@dataclass(frozen=True)
class ProjectedEntry:
    """A stored entry together with its derived, read-only metrics."""
    entry: LedgerEntry
    cumulative_contribution: Decimal
    cumulative_contribution_pv: Decimal
    cumulative_inflation: Decimal
    present_value: Decimal


def project_entries(
    entries: Iterable[LedgerEntry],
    sort_by: SortField = SortField.MONTH,
    direction: SortDirection = SortDirection.ASC,
) -> list[ProjectedEntry]:
    """
    Attach derived metrics to every entry of one investment.

    The input order does not matter. The output is ordered by
    sort_by/direction; ties keep month order.
    """
    chronological = sorted(entries, key=lambda e: e.month)

    projected = []
    inflation_factor = Decimal(1)
    contributed = Decimal(0)
    for entry in chronological:
        inflation_factor *= Decimal(1) + to_decimal(entry.inflation_rate) / HUNDRED
        contributed += to_decimal(entry.contribution)
        present_value = to_decimal(entry.closing_balance) / inflation_factor

        projected.append(ProjectedEntry(
            entry=entry,
            cumulative_contribution=contributed,
            cumulative_contribution_pv=contributed,
            cumulative_inflation=(inflation_factor - 1).quantize(
                INFLATION_QUANTUM, rounding=ROUND_HALF_UP
            ),
            present_value=present_value.quantize(
                BALANCE_QUANTUM, rounding=ROUND_HALF_UP
            ),
        ))

    if sort_by == SortField.MONTH and direction == SortDirection.ASC:
        return projected
    return sorted(
        projected,
        key=SORT_KEYS[sort_by],
        reverse=direction == SortDirection.DESC,
    )
