"""
Month sequencing for ledger entries.

A series has no gaps when built through the create path: the
first entry lands on the asset's starting month, every later
one on the month right after the latest existing entry.
Months are represented as dates pinned to day 1.
"""

from datetime import date


def first_of_month(value: date) -> date:
    """Pin a date to the first day of its month."""
    return value.replace(day=1)


def add_months(month: date, count: int) -> date:
    """Shift a month forward (or back) by whole months, across years."""
    index = month.year * 12 + (month.month - 1) + count
    return date(index // 12, index % 12 + 1, 1)


def next_month(starting_month: date, latest_month: date | None = None) -> date:
    """
    Month the next created entry belongs to.

    With no entries yet, that's the asset's starting month.
    Otherwise it's one month after the latest entry, whatever
    the starting month says. There is no back-dating or
    gap-filling through this path.
    """
    if latest_month is None:
        return first_of_month(starting_month)
    return add_months(first_of_month(latest_month), 1)
