"""
Balance compounding.

closing = (opening + contribution) x (1 + rate / 100)

The contribution is added before the month's return is applied.
Everything stays in Decimal and each step is rounded to the
column's scale, so a 240-month chain does not drift.
"""

from decimal import Decimal, ROUND_HALF_UP

# Matches Numeric(19, 4) on the balance columns
BALANCE_QUANTUM = Decimal("0.0001")

# Numeric(19, 4) holds at most 15 integer digits
MAX_BALANCE = Decimal("1e15")

HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Coerce ints, floats, strings and Decimals to Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compound(opening_balance, contribution, actual_return_rate) -> Decimal:
    """Closing balance for one month."""
    base = to_decimal(opening_balance) + to_decimal(contribution)
    growth = Decimal(1) + to_decimal(actual_return_rate) / HUNDRED
    return (base * growth).quantize(BALANCE_QUANTUM, rounding=ROUND_HALF_UP)


def fits_balance_column(balance) -> bool:
    return abs(to_decimal(balance)) < MAX_BALANCE
