# src/dealdesk/domain/errors.py


class InvalidInputError(ValueError):
    """Caller supplied a value outside the accepted range (negative amount, bad rating, ...)."""


class StorageError(RuntimeError):
    """The persisted store could not be read or written. Nothing was saved."""
