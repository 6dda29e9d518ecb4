"""
Shared enumerations.

String enums so the values can be used directly as query
parameters and come back unchanged in JSON responses.
"""

import enum


class SortField(str, enum.Enum):
    """Column a list of ledger entries can be ordered by."""
    MONTH = "month"
    RETURN = "return"
    CONTRIBUTION = "contribution"
    BALANCE = "balance"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"
