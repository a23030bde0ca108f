"""Error taxonomy for pocketledger.

Every failure the engine reports is a subclass of LedgerError, so callers can
catch one base class and inspect the concrete type.
"""


class LedgerError(Exception):
    """Base class for all ledger errors."""


class ValidationError(LedgerError, ValueError):
    """Client input rejected before any mutation took place."""


class InvalidAmount(ValidationError):
    """Amount is not a positive finite number."""


class InvalidCategory(ValidationError):
    """Category is missing or blank after trimming."""


class InvalidKind(ValidationError):
    """Kind is not 'expense' or 'income'."""


class InvalidMonthKey(LedgerError, ValueError):
    """Month key is not a valid YYYY-MM calendar month."""


class NotFound(LedgerError, LookupError):
    """No entry exists with the requested id."""


class StorageError(LedgerError):
    """The database could not be read or written."""


class InvalidRequest(LedgerError, ValueError):
    """Request payload is malformed (unknown op, missing or mistyped field)."""
