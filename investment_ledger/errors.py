"""
Ledger exceptions.

Every error derives from ValueError so service callers can
keep a single `except ValueError` where they don't care about
the reason. The API layer distinguishes them to pick the
status code: not-found is terminal, a conflict may be retried.
"""


class LedgerError(ValueError):
    """Base class for all ledger failures."""


class NotFoundError(LedgerError):
    """The referenced investment or entry does not exist."""


class ConflictError(LedgerError):
    """Another entry already occupies the month being written."""


class LedgerValidationError(LedgerError):
    """The request is well-formed but cannot be applied."""
