"""Storage error hierarchy.

Every failure raised by the storage layer derives from StorageError so
callers can catch one type. ``operation`` names the storage call that
failed.
"""
from typing import Optional


class StorageError(Exception):
    """Base class for storage failures."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation


class NotFoundError(StorageError):
    """A point update or duplicate targeted a uid with no matching row."""


class StoreUnavailableError(StorageError):
    """The backing store could not be opened, read or written."""


class ConstraintViolationError(StorageError):
    """A write would break an integrity rule, e.g. a dangling box reference."""
